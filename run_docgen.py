#!/usr/bin/env python3
"""
Top-level pipeline for generating a C# class specification document.

Scans a source folder (honouring ``generate.ignore``), extracts classes and
interfaces with their members and XML docs, numbers them by namespace and
writes a tabular Word document.

Usage:
    python run_docgen.py --source-dir ./src --output-file out/ClassSpecifications.docx --start-index 3
    python run_docgen.py --source-dir ./src --start-index 4 --include-class Service --model-file out/model.jsonl
    python run_docgen.py --source-dir ./src --list-types
"""

import argparse
import json
import logging
import os
import sys
import time
from typing import List, Optional, Sequence

from core.errors import GenerationError, IOFailure, ValidationFailure
from core.generator_config import GeneratorConfig, resolve_generator_config
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id
from document.assembler import assemble_document
from document.docx_backend import DocxBackend
from document.numbering import number_sections
from extraction.extractor import build_model
from extraction.ignore_rules import IgnoreRuleSet
from extraction.models import TypeEntity
from extraction.selection import (
    build_source_tree,
    filter_types,
    find_node,
    selected_files,
    set_selected,
)

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="C# Class Specification Document Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_docgen.py --source-dir ./src --output-file Spec.docx --start-index 3\n"
            "  python run_docgen.py --source-dir ./src --start-index 3 --deselect Tests\n"
        ),
    )

    parser.add_argument(
        "--source-dir",
        required=True,
        help="Root folder of the C# sources; its generate.ignore file is applied.",
    )
    parser.add_argument(
        "--output-file",
        default=None,
        help="Path of the .docx document to write. Default: ClassSpecifications.docx",
    )
    parser.add_argument(
        "--start-index",
        default=None,
        help="Top-level section number of the generated chapter (positive integer).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML configuration file. Default: docgen.yml if present.",
    )
    parser.add_argument(
        "--deselect",
        action="append",
        default=[],
        metavar="RELPATH",
        help="Deselect a file or folder (relative to --source-dir). Repeatable.",
    )
    parser.add_argument(
        "--include-class",
        action="append",
        default=[],
        metavar="QUERY",
        help="Keep only types whose name contains QUERY (case-insensitive). Repeatable.",
    )
    parser.add_argument(
        "--exclude-class",
        action="append",
        default=[],
        metavar="FULLNAME",
        help="Drop the type with this namespace-qualified name. Repeatable.",
    )
    parser.add_argument(
        "--model-file",
        default=None,
        help="Also write the extracted model as JSONL to this path.",
    )
    parser.add_argument(
        "--list-types",
        action="store_true",
        default=False,
        help="Print the selected types and exit without writing a document.",
    )
    parser.add_argument(
        "--continue-on-error",
        action="store_true",
        default=None,
        help="Skip files that fail to parse instead of aborting the run.",
    )
    parser.add_argument(
        "--strict-syntax",
        action="store_true",
        default=None,
        help="Treat files with syntax errors as parse failures.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging.",
    )

    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge CLI flags over environment, YAML and defaults."""
    return resolve_generator_config(
        config_path=args.config,
        overrides={
            "start_index": args.start_index,
            "output_file": args.output_file,
            "continue_on_error": args.continue_on_error,
            "strict_syntax": args.strict_syntax,
        },
    )


def collect_sources(source_dir: str, deselect: Sequence[str] = ()) -> List[str]:
    """Phase 0: Build the selection tree and return the selected files.

    Raises:
        ValidationFailure: If the folder is missing, a deselected path is not
            part of the tree, or nothing remains selected.
    """
    with phase_scope("discover"):
        rules = IgnoreRuleSet.for_root(source_dir)
        tree = build_source_tree(source_dir, rules)

        for relative_path in deselect:
            node = find_node(tree, relative_path)
            if node is None:
                raise ValidationFailure(f"Cannot deselect unknown path: {relative_path}")
            set_selected(node, False)

        files = selected_files(tree)
        if not files:
            raise ValidationFailure(f"No .cs files selected under {source_dir}")

        logger.info("Selected %d source files (%d ignore rules)", len(files), len(rules))
        return files


def write_model_file(entities: Sequence[TypeEntity], model_file: str) -> int:
    """Serialize the type model to JSONL, one entity per line."""
    try:
        os.makedirs(os.path.dirname(os.path.abspath(model_file)), exist_ok=True)
        with open(model_file, "w", encoding="utf-8") as f:
            for entity in entities:
                f.write(json.dumps(entity.to_dict(), ensure_ascii=False) + "\n")
    except OSError as e:
        raise IOFailure(f"Cannot write model file {model_file}: {e}", path=model_file) from e
    logger.info(f"Wrote {len(entities)} types to {model_file}")
    return len(entities)


def run(args: argparse.Namespace) -> int:
    """Run the pipeline; returns the number of documented types."""
    config = resolve_config(args)

    # --- Validate inputs before any pipeline work ---
    if not os.path.isdir(args.source_dir):
        raise ValidationFailure(f"Source folder not found: {args.source_dir}")
    if not args.list_types:
        if not config.output_file:
            raise ValidationFailure("An output file path is required")
        if config.start_index is None:
            raise ValidationFailure("A positive starting index is required (--start-index)")

    files = collect_sources(args.source_dir, args.deselect)

    # --- Extract ---
    t0 = time.time()
    with phase_scope("extract"):
        entities, stats = build_model(
            files,
            root=args.source_dir,
            continue_on_error=config.continue_on_error,
            strict_syntax=config.strict_syntax,
        )
        entities = filter_types(entities, args.include_class, args.exclude_class)
    logger.info("Extraction completed in %.2fs: %s", time.time() - t0, stats)

    if not entities:
        raise ValidationFailure("No classes or interfaces selected for the document")

    if args.list_types:
        for entity in entities:
            print(f"{entity.kind:<9} {entity.full_name}")
        return len(entities)

    # --- Number & render ---
    with phase_scope("number"):
        sections = number_sections(entities, config.start_index)

    with phase_scope("render"):
        document = assemble_document(
            sections,
            config.start_index,
            title=config.title,
            style=config.style,
        )
        output_path = DocxBackend(config.style).write(document, config.output_file)
        if args.model_file:
            try:
                write_model_file(entities, args.model_file)
            except IOFailure:
                logger.error("Removing %s after failed model dump", output_path)
                os.remove(output_path)
                raise

    return len(entities)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the generator."""
    args = parse_args(argv)
    configure_structured_logging(logging.DEBUG if args.verbose else logging.INFO)
    run_id = set_run_id()

    logger.info("*" * 80)
    logger.info(" C# Class Specification Generator (run %s)", run_id)
    logger.info("*" * 80)

    try:
        count = run(args)
    except ValidationFailure as e:
        logger.error(f"Invalid input: {e}")
        sys.exit(1)
    except GenerationError as e:
        logger.error(f"Generation failed: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Generator crashed: {e}", exc_info=True)
        sys.exit(1)

    logger.info(" Generation finished successfully (%d types).", count)


if __name__ == "__main__":
    main()
