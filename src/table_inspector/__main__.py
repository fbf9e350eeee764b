"""
Command line entry point: parse a SHOW CREATE TABLE dump and pick its best index

Usage: python -m table_inspector <ddl-file> [<preferred-index>]
"""
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from table_inspector.core.config import Config
from table_inspector.core.errors import TableInspectorError
from table_inspector.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """Main function"""
    load_dotenv()
    args = sys.argv[1:] if argv is None else argv

    if not args:
        print(__doc__.strip().splitlines()[-1], file=sys.stderr)
        return 1

    config_file = os.getenv('CONFIG_FILE')
    try:
        config = Config.from_yaml(config_file) if config_file else Config()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config.logging.model_dump())

    ddl_file = Path(args[0])
    if not ddl_file.exists():
        logger.error(f"Definition file not found: {ddl_file}")
        return 1

    preferred = args[1] if len(args) > 1 else None
    builder = config.create_builder()
    selector = config.create_selector()

    try:
        table = builder.build(ddl_file.read_text())
        best_index = selector.find_best_index(table, preferred)
    except TableInspectorError as e:
        logger.error(f"{e.code}: {e.message}")
        print(json.dumps({'error': e.to_dict()}, indent=2), file=sys.stderr)
        return 1

    print(json.dumps({'table': table.to_dict(), 'best_index': best_index}, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
