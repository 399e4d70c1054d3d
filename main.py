#!/usr/bin/env python3
"""
Invoice Field Extraction Engine - Main Entry Point.

Command-line access to the extraction pipeline for invoice text files
(OCR output or text-layer dumps).

Usage:
    Command Line:
        python main.py --input invoice.txt
        python main.py --input ./texts/ --output outputs/results.json
        python main.py --input ./texts/ --evaluate --ground-truth data/ground_truth.json

    Python:
        from main import run_extraction
        documents = run_extraction("texts/")

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import project modules
from config import ConfigurationManager
from invoice_fields.utils.logger import get_logger, set_level, setup_logger_from_config
from invoice_fields.utils.helpers import ensure_directory, get_file_extension

SUPPORTED_EXTENSIONS = {'.txt'}


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Invoice Field Extraction Engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process a single text file:
        python main.py --input invoice.txt

    Process a directory and save results:
        python main.py --input ./texts/ --output outputs/results.json

    With evaluation:
        python main.py --input ./texts/ --evaluate --ground-truth data/ground_truth.json
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Input text file or directory of .txt files"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output JSON file (default: print to stdout)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--evaluate",
        action="store_true",
        help="Run evaluation after extraction"
    )

    parser.add_argument(
        "--ground-truth", "-gt",
        type=str,
        default=None,
        help="Path to ground truth file (JSON or CSV) for evaluation"
    )

    parser.add_argument(
        "--report",
        type=str,
        default=None,
        help="Write the evaluation report to this path (.txt or .json)"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.
    """
    config = ConfigurationManager(args.config)
    logger = setup_logger_from_config()

    if args.debug:
        set_level("DEBUG")
    elif args.quiet:
        set_level("WARNING")

    logger.info("=" * 60)
    logger.info("INVOICE FIELD EXTRACTION ENGINE")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")

    return config


def collect_input_files(input_path: str) -> List[Path]:
    """
    Resolve the input argument to a list of text files.

    Args:
        input_path: File or directory path.

    Returns:
        Sorted list of files to process.

    Raises:
        FileNotFoundError: If input path doesn't exist.
        ValueError: If a single file has an unsupported extension.
    """
    logger = get_logger(__name__)
    path = Path(input_path)

    if not path.exists():
        raise FileNotFoundError(f"Input path not found: {path}")

    if path.is_file():
        if get_file_extension(path) in SUPPORTED_EXTENSIONS:
            return [path]
        raise ValueError(f"Unsupported file type: {path.suffix}")

    files = sorted(
        p for p in path.iterdir()
        if p.is_file() and get_file_extension(p) in SUPPORTED_EXTENSIONS
    )

    if not files:
        logger.warning(f"No supported files found in: {path}")
    else:
        logger.info(f"Found {len(files)} files to process")

    return files


def run_extraction(input_path: str) -> List[Dict[str, Any]]:
    """
    Run field extraction over one file or a directory of text files.

    Each file becomes an InvoiceDocument identified by its file name and
    goes through the DocumentProcessor. A file that cannot be read ends
    up with status "failed" and no fields.

    Args:
        input_path: Path to a text file or directory.

    Returns:
        One dictionary per document (see InvoiceDocument.to_dict).
    """
    from invoice_fields.processing import DocumentProcessor, FileTextProvider, InvoiceDocument

    logger = get_logger(__name__)
    processor = DocumentProcessor(FileTextProvider())

    documents = []
    for file_path in collect_input_files(input_path):
        document = InvoiceDocument(id=file_path.name, filename=str(file_path))
        processor.process(document)
        documents.append(document.to_dict())

        logger.info(
            f"  {file_path.name}: {document.status.value}, "
            f"invoice #{document.invoice_number or 'N/A'}, "
            f"total {document.total_amount if document.total_amount is not None else 'N/A'}"
        )

    return documents


def run_evaluation(
    documents: List[Dict[str, Any]],
    ground_truth_path: str,
    report_path: Optional[str] = None
) -> str:
    """
    Evaluate extracted documents against ground truth.

    Args:
        documents: Output of run_extraction.
        ground_truth_path: Path to the ground truth file.
        report_path: Optional report destination.

    Returns:
        The text report, or the report path when one was written.
    """
    from invoice_fields.evaluation import Evaluator

    evaluator = Evaluator(ground_truth_path)
    result = evaluator.evaluate({doc['id']: doc for doc in documents})

    if report_path:
        report_format = 'json' if get_file_extension(report_path) == '.json' else 'txt'
        return evaluator.generate_report(result, report_path, format=report_format)

    return evaluator.generate_report(result)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, 1 for errors, 130 when interrupted).
    """
    debug = False
    try:
        args = parse_arguments(argv)
        debug = args.debug

        initialize_system(args)
        logger = get_logger(__name__)

        if args.evaluate and not args.ground_truth:
            raise ValueError("--evaluate requires --ground-truth")

        documents = run_extraction(args.input)

        output = json.dumps(documents, indent=2)
        if args.output:
            output_path = Path(args.output)
            ensure_directory(output_path.parent)
            output_path.write_text(output, encoding='utf-8')
            logger.info(f"Results saved to: {output_path}")
        else:
            print(output)

        if args.evaluate:
            report = run_evaluation(documents, args.ground_truth, args.report)
            if args.report:
                logger.info(f"Evaluation report: {report}")
            else:
                print(report, file=sys.stderr)

        logger.info("=" * 60)
        logger.info(f"Extraction complete. Processed {len(documents)} files.")
        logger.info("=" * 60)

        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user")
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
