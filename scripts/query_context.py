"""Ingest a knowledge directory and print the context assembled for a query."""
from __future__ import annotations

import argparse
import json
import sys

from application.services.knowledge_store import KnowledgeStore
from application.use_cases.build_prompt import format_sources_section
from domain.errors import StructuredKnowledgeError, UploadError
from infrastructure.config import ContainerConfig
from ui.logging_utils import setup_logging


def parse_args() -> argparse.Namespace:
    env_config = ContainerConfig.from_env()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("query", help="Troubleshooting question")
    parser.add_argument(
        "--knowledge-root",
        default=env_config.knowledge_root,
        help=f"Knowledge directory (default: {env_config.knowledge_root})",
    )
    parser.add_argument(
        "--structured-data",
        default=env_config.structured_data_path,
        help=f"JSON file with error codes and common issues (default: {env_config.structured_data_path})",
    )
    parser.add_argument("--keywords", default=env_config.keywords_path, help="Optional keyword override file")
    parser.add_argument("--model", default=env_config.model, help=f"Generation model (default: {env_config.model})")
    parser.add_argument(
        "--upload",
        action="append",
        dest="uploads",
        default=[],
        help="File to attach to the session. Can be given several times.",
    )
    parser.add_argument("--prompt", action="store_true", help="Print the generation payload instead of the context.")
    parser.add_argument("--log-level", default=None, help="Overrides TECHCONTEXT_LOG_LEVEL.")
    parser.add_argument("--log-file", default=None, help="Overrides TECHCONTEXT_LOG_FILE; pass an empty string to disable.")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    setup_logging(args.log_level, args.log_file)
    config = ContainerConfig(
        knowledge_root=args.knowledge_root,
        structured_data_path=args.structured_data,
        keywords_path=args.keywords,
        model=args.model,
    )
    try:
        store = KnowledgeStore.open(config)
    except StructuredKnowledgeError as exc:
        print(f"Cannot start: {exc}", file=sys.stderr)
        return 2

    for path in args.uploads:
        try:
            record = store.ingest_single(path)
        except UploadError as exc:
            print(exc, file=sys.stderr)
            continue
        print(f"uploaded: {record.describe()}")

    if args.prompt:
        request, _context = store.generation_request(args.query)
        print(json.dumps(request.as_payload(), indent=2, ensure_ascii=False))
        return 0

    result = store.assemble(args.query)
    print(result.text)
    print(format_sources_section(result.sources, out_of_scope=result.out_of_scope))
    return 0


if __name__ == "__main__":
    sys.exit(main())
