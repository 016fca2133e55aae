"""
Spreadsheet reading for match history imports.
"""

import os
import logging
from typing import Any, Dict, List

import pandas as pd

logger = logging.getLogger(__name__)


class SpreadsheetReader:
    """Reads the first sheet of a match history file into row records."""

    EXCEL_EXTENSIONS = ('.xlsx', '.xls')
    CSV_EXTENSIONS = ('.csv',)

    @staticmethod
    def read_rows(file_path: str, header_rows: int = 1) -> List[Dict[str, Any]]:
        """
        Read a spreadsheet and return its data rows in file order.
        The last of the header_rows leading rows holds the column names, which
        become dict keys; rows above it are skipped. Empty cells become None.
        """
        if header_rows < 1:
            raise ValueError(f"header_rows must be at least 1, got {header_rows}")

        header = header_rows - 1
        extension = os.path.splitext(file_path)[1].lower()
        if extension in SpreadsheetReader.EXCEL_EXTENSIONS:
            df = pd.read_excel(file_path, sheet_name=0, header=header, dtype=object)
        elif extension in SpreadsheetReader.CSV_EXTENSIONS:
            df = pd.read_csv(file_path, dtype=object, sep=None, engine='python', encoding='utf-8-sig',
                             skiprows=header)
        else:
            raise ValueError(f"Unsupported spreadsheet format: '{extension}'")

        logger.info(f"Loaded spreadsheet {file_path} with {len(df)} rows")
        return SpreadsheetReader.dataframe_to_rows(df)

    @staticmethod
    def dataframe_to_rows(df: pd.DataFrame) -> List[Dict[str, Any]]:
        """Convert a DataFrame into plain dicts, dropping fully empty rows."""
        df = df.dropna(how='all')
        df.columns = [str(c).strip() for c in df.columns]
        rows = []
        for _, row in df.iterrows():
            rows.append({
                column: (None if not isinstance(value, str) and pd.isna(value) else value)
                for column, value in row.items()
            })
        return rows
