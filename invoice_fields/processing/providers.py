"""
Text Provider Implementations.

FileTextProvider reads a document's text layer from a plain-text file,
which is how the command-line tool and the evaluation harness feed the
engine. OCR and PDF providers live outside this package and implement
the same acquire(document) contract.

Author: ML Engineering Team
"""

from pathlib import Path
from typing import Optional, Union

from invoice_fields.utils.exceptions import NoTextAvailableError
from invoice_fields.utils.helpers import read_text_file, validate_file_exists
from invoice_fields.utils.logger import get_logger
from .document import InvoiceDocument, TextSourceKind
from .processor import AcquiredText

# Initialize module logger
logger = get_logger(__name__)


class FileTextProvider:
    """
    Reads document text from a file named by document.filename.

    Attributes:
        base_dir: Directory relative file names are resolved against
    """

    def __init__(self, base_dir: Optional[Union[str, Path]] = None) -> None:
        self.base_dir = Path(base_dir) if base_dir else None

    def acquire(self, document: InvoiceDocument) -> AcquiredText:
        """
        Read the document's text file.

        Raises:
            NoTextAvailableError: No file name, or the file does not exist.
        """
        if not document.filename:
            raise NoTextAvailableError(document.id, "document has no file")

        path = Path(document.filename)
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path

        if not validate_file_exists(path):
            raise NoTextAvailableError(document.id, f"file not found: {path}")

        logger.debug(f"Reading text for document {document.id} from {path}")
        return AcquiredText(text=read_text_file(path), source=TextSourceKind.TEXT)
