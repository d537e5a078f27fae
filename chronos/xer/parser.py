"""
XER File Parser for Primavera P6 Schedule Data

This module turns the text of a Primavera P6 XER export into raw tables:
a mapping of table name to an ordered list of records, each record mapping
field name to the raw string value.

XER Format:
- Tab-delimited text files
- Structure: ERMHDR (header) followed by %T (table), %F (fields), %R (rows)
- Each table represents a different entity (tasks, resources, calendars, etc.)

Parsing is tolerant: unknown lines are skipped, short rows are padded with
empty strings, long rows are truncated to the field list, and rows that
arrive before any table or field list are dropped. Nothing here raises on
malformed content.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from chronos.config.settings import settings

logger = logging.getLogger(__name__)

RawRecord = Dict[str, str]
RawTables = Dict[str, List[RawRecord]]

TABLE_MARKER = '%T'
FIELDS_MARKER = '%F'
ROW_MARKER = '%R'
HEADER_MARKER = 'ERMHDR'


class XERParser:
    """Parse Primavera P6 XER content into raw string tables"""

    def __init__(self, file_path: Optional[str] = None, encoding: Optional[str] = None):
        """
        Initialize the parser

        Args:
            file_path: Path to the XER file (optional when parsing text directly)
            encoding: Text encoding of the file (default: settings.XER_ENCODING)
        """
        self.file_path = Path(file_path) if file_path else None
        self.encoding = encoding or settings.XER_ENCODING
        self.tables: RawTables = {}
        self.fields: Dict[str, List[str]] = {}
        self.header: Dict[str, object] = {}

    def parse(self) -> RawTables:
        """
        Read and parse the XER file given at construction

        Returns:
            Dictionary mapping table names to lists of raw records
        """
        if self.file_path is None:
            raise ValueError("No file path given; use parse_content() for text input")
        if not self.file_path.exists():
            raise FileNotFoundError(f"XER file not found: {self.file_path}")

        with open(self.file_path, 'r', encoding=self.encoding, errors='ignore') as f:
            text = f.read()

        return self.parse_content(text)

    def parse_content(self, text: str) -> RawTables:
        """
        Parse XER text and return all tables as raw records

        Args:
            text: Full content of an XER export

        Returns:
            Dictionary mapping table names to lists of raw records
        """
        self.tables = {}
        self.fields = {}
        self.header = {}

        current_table: Optional[str] = None
        current_fields: List[str] = []
        dropped_rows = 0

        for line in (text or '').splitlines():
            line = line.strip()

            if not line:
                continue

            parts = line.split('\t')
            marker = parts[0]

            if marker == HEADER_MARKER:
                self._parse_header(line, parts)

            elif marker == TABLE_MARKER:
                if len(parts) < 2 or not parts[1]:
                    continue
                # Start new table; a repeated name starts over
                current_table = parts[1]
                current_fields = []
                self.tables[current_table] = []
                self.fields[current_table] = []

            elif marker == FIELDS_MARKER:
                if current_table is None:
                    continue
                current_fields = parts[1:]
                self.fields[current_table] = current_fields

            elif marker == ROW_MARKER:
                if current_table is None or not current_fields:
                    dropped_rows += 1
                    continue
                self.tables[current_table].append(self._build_record(current_fields, parts[1:]))

        if dropped_rows:
            logger.debug(f"Dropped {dropped_rows} data rows with no active table or field list")
        for table_name, records in self.tables.items():
            logger.debug(f"Parsed table {table_name}: {len(records)} rows")

        return self.tables

    def _parse_header(self, line: str, parts: List[str]) -> None:
        """Parse the ERMHDR header line"""
        # Header format: ERMHDR\tversion\texport date\t...
        self.header['raw'] = line
        if len(parts) > 1:
            self.header['data'] = parts[1:]

    @staticmethod
    def _build_record(fields: List[str], values: List[str]) -> RawRecord:
        """Zip values onto field names, padding short rows and truncating long ones"""
        if len(values) < len(fields):
            values = values + [''] * (len(fields) - len(values))
        return dict(zip(fields, values))

    def get_table(self, table_name: str) -> List[RawRecord]:
        """
        Get a specific table by name

        Args:
            table_name: Name of the table to retrieve

        Returns:
            List of raw records (empty if the table doesn't exist)
        """
        return self.tables.get(table_name, [])

    def list_tables(self) -> List[str]:
        """
        Get list of all available table names

        Returns:
            List of table names in file order
        """
        return list(self.tables.keys())

    def to_dataframes(self) -> Dict[str, pd.DataFrame]:
        """
        Convert every raw table to a pandas DataFrame

        Returns:
            Dictionary mapping table names to DataFrames (string columns)
        """
        frames = {}
        for table_name, records in self.tables.items():
            columns = self.fields.get(table_name) or None
            frames[table_name] = pd.DataFrame(records, columns=columns)
        return frames

    def export_table_to_csv(self, table_name: str, output_path: str) -> None:
        """
        Export a specific table to CSV

        Args:
            table_name: Name of the table to export
            output_path: Path for the output CSV file
        """
        if table_name not in self.tables:
            raise ValueError(f"Table '{table_name}' not found in XER file")

        df = self.to_dataframes()[table_name]
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False)
        logger.info(f"Exported {len(df)} rows to {output}")

    def export_all_to_csv(self, output_dir: str) -> List[Path]:
        """
        Export all tables to separate CSV files

        Args:
            output_dir: Directory to save CSV files

        Returns:
            Paths of the written files
        """
        output_path = Path(output_dir)
        output_path.mkdir(parents=True, exist_ok=True)

        written = []
        for table_name, df in self.to_dataframes().items():
            csv_path = output_path / f"{table_name}.csv"
            df.to_csv(csv_path, index=False)
            written.append(csv_path)
            logger.info(f"Exported {table_name}: {len(df)} rows to {csv_path}")

        return written

    def summary(self) -> Dict:
        """
        Get a summary of the parsed XER contents

        Returns:
            Dictionary with summary statistics
        """
        summary = {
            'file_path': str(self.file_path) if self.file_path else None,
            'total_tables': len(self.tables),
            'tables': {}
        }

        for table_name, records in self.tables.items():
            columns = self.fields.get(table_name, [])
            summary['tables'][table_name] = {
                'rows': len(records),
                'columns': len(columns),
                'column_names': list(columns)
            }

        return summary


def parse_xer_text(text: str) -> RawTables:
    """
    Quick utility function to tokenize XER text

    Args:
        text: Full content of an XER export

    Returns:
        Dictionary of table names to raw records
    """
    return XERParser().parse_content(text)
