"""
Ground Truth Loader Module.

This module loads the expected field values used to evaluate the
engine against a labelled set of invoice text files.

Supported Formats:
    - JSON: a list of records, {"records": [...]}, or an object keyed
      by source file name
    - CSV: one record per row with a header line

Author: ML Engineering Team
"""

import csv
import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from invoice_fields.utils.exceptions import GroundTruthFormatError
from invoice_fields.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class GroundTruthLoader:
    """
    Loads ground truth records from JSON or CSV.

    Attributes:
        data: Loaded ground truth records
        file_path: Path to the ground truth file

    Example:
        >>> loader = GroundTruthLoader("ground_truth.json")
        >>> loader.get_by_filename("invoice_001.txt")
        {'source_file': 'invoice_001.txt', 'invoice_number': 'INV-2048', ...}
    """

    # tax_amount may legitimately be absent on an invoice
    REQUIRED_FIELDS = ['invoice_number', 'invoice_date', 'total_amount']

    def __init__(self, file_path: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize the ground truth loader.

        Args:
            file_path: Path to ground truth file. If None, creates empty loader.
        """
        self.file_path = Path(file_path) if file_path else None
        self.data: List[Dict[str, Any]] = []
        self._file_index: Dict[str, int] = {}

        if self.file_path:
            self.load(self.file_path)

    def load(self, file_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """
        Load ground truth from file.

        Args:
            file_path: Path to ground truth file.

        Returns:
            List of ground truth records.

        Raises:
            FileNotFoundError: If file doesn't exist.
            GroundTruthFormatError: If the format is unsupported or the
                content has the wrong shape.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Ground truth file not found: {path}")

        extension = path.suffix.lower()

        if extension == '.json':
            self.data = self._load_json(path)
        elif extension == '.csv':
            self.data = self._load_csv(path)
        else:
            raise GroundTruthFormatError(str(path), f"Unsupported format: {extension}")

        self._build_index()

        logger.info(f"Loaded {len(self.data)} ground truth records from {path.name}")
        return self.data

    def _load_json(self, path: Path) -> List[Dict[str, Any]]:
        """Load ground truth from JSON file."""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise GroundTruthFormatError(str(path), f"Invalid JSON: {e}") from e

        if isinstance(data, dict):
            if 'records' in data:
                data = data['records']
            else:
                # keyed by filename
                data = [
                    {**record, 'source_file': filename}
                    for filename, record in data.items()
                    if isinstance(record, dict)
                ]

        if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
            raise GroundTruthFormatError(str(path), "Expected a list of record objects")

        return data

    def _load_csv(self, path: Path) -> List[Dict[str, Any]]:
        """Load ground truth from CSV file."""
        with open(path, 'r', encoding='utf-8', newline='') as f:
            reader = csv.DictReader(f)
            # empty cells mean "no value"
            return [
                {k: (v if v != '' else None) for k, v in row.items() if k}
                for row in reader
            ]

    def _build_index(self) -> None:
        """Build an index for lookups by filename."""
        self._file_index = {}

        for idx, record in enumerate(self.data):
            filename = record.get('source_file') or record.get('filename')
            if filename:
                self._file_index[str(filename)] = idx
                self._file_index[Path(str(filename)).name] = idx

    def get_all(self) -> List[Dict[str, Any]]:
        """Get all ground truth records."""
        return self.data

    def get_by_index(self, index: int) -> Optional[Dict[str, Any]]:
        """
        Get ground truth record by index.

        Args:
            index: Record index.

        Returns:
            Ground truth record or None.
        """
        if 0 <= index < len(self.data):
            return self.data[index]
        return None

    def get_by_filename(self, filename: str) -> Optional[Dict[str, Any]]:
        """
        Get ground truth record by source filename.

        Args:
            filename: Source file name (with or without path).

        Returns:
            Ground truth record or None.
        """
        if filename in self._file_index:
            return self.data[self._file_index[filename]]

        normalized = Path(filename).name
        if normalized in self._file_index:
            return self.data[self._file_index[normalized]]

        return None

    def validate(self) -> Dict[str, Any]:
        """
        Validate the loaded ground truth data.

        Returns:
            Dictionary with record counts and per-field missing counts.
        """
        results = {
            'total_records': len(self.data),
            'valid_records': 0,
            'invalid_records': 0,
            'missing_fields': {},
        }

        for record in self.data:
            missing = [f for f in self.REQUIRED_FIELDS if not record.get(f)]

            for field in missing:
                results['missing_fields'][field] = results['missing_fields'].get(field, 0) + 1

            if missing:
                results['invalid_records'] += 1
            else:
                results['valid_records'] += 1

        logger.info(
            f"Ground truth validation: {results['valid_records']}/{results['total_records']} valid"
        )

        return results

    def __len__(self) -> int:
        return len(self.data)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.data)

    def __getitem__(self, index: int) -> Dict[str, Any]:
        return self.data[index]
