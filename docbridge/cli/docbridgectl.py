#!/usr/bin/env python3
"""
docbridgectl - docbridge operator CLI

Load models and create document indexes outside of the host application.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional

from docbridge.config import ENV_CONFIG, HostConfig, load_config
from docbridge.discovery import ModelFound
from docbridge.documents import describe_model
from docbridge.errors import DocbridgeError
from docbridge.integration import HostIntegration
from docbridge.loader import ModelLoader


class DocbridgeCLI:
    """Runs docbridge operations against one host configuration."""
    
    def __init__(self, config: HostConfig, loader: Optional[ModelLoader] = None):
        self.config = config
        self.integration = HostIntegration(config, loader)
        self.loader = self.integration.loader
    
    def create_indexes(self, pattern: Optional[str] = None) -> None:
        """Create indexes for one pattern, or for every model root."""
        if pattern:
            indexed = self.loader.create_indexes(pattern)
        else:
            if not self.config.model_paths():
                print("No model paths configured.")
                return
            indexed = self.integration.create_all_indexes()
        
        if not indexed:
            print("No document models found.")
            return
        
        for model in indexed:
            print(f"✅ Generated indexes for {describe_model(model)}")
        print(f"\nIndexed {len(indexed)} model(s)")
    
    def load_models(self) -> None:
        self.integration.on_console()
        print(f"Loaded {len(self.loader.registry)} model type(s)")
    
    def preload_models(self) -> None:
        if not self.integration.on_initialize():
            print("Model preloading disabled; nothing loaded.")
            return
        print(f"Preloaded {len(self.loader.registry)} model type(s)")
    
    def list_models(self, pattern: Optional[str] = None) -> None:
        """Print the tolerant scan result for every matched file."""
        patterns = [pattern] if pattern else self.integration.index_patterns()
        
        found = 0
        for current in patterns:
            for result in self.loader.discover_models(current):
                if isinstance(result, ModelFound):
                    found += 1
                    print(f"{result.reference.path}: {describe_model(result.model)}")
                else:
                    print(f"{result.reference.path}: skipped ({result.describe()})")
        
        print(f"\n{found} document model(s)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='docbridge operator CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    
    parser.add_argument(
        '--config',
        default=os.environ.get(ENV_CONFIG),
        help=f'Host config YAML (default: ${ENV_CONFIG})'
    )
    
    parser.add_argument(
        '--log-level',
        default='WARNING',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Log level (default: WARNING)'
    )
    
    subparsers = parser.add_subparsers(dest='command', help='Command to execute')
    
    # create-indexes
    create_parser = subparsers.add_parser('create-indexes', help='Create indexes for document models')
    create_parser.add_argument('--pattern', help='Glob of model files (default: every model root)')
    
    # load-models
    subparsers.add_parser('load-models', help='Load every model file')
    
    # preload-models
    subparsers.add_parser('preload-models', help='Load every model file if preloading is enabled')
    
    # list-models
    list_parser = subparsers.add_parser('list-models', help='Show which files resolve to document models')
    list_parser.add_argument('--pattern', help='Glob of model files (default: every model root)')
    
    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        sys.exit(1)
    
    logging.basicConfig(level=getattr(logging, args.log_level), format='%(levelname)s %(name)s: %(message)s')
    
    try:
        cli = DocbridgeCLI(load_config(args.config))
        
        if args.command == 'create-indexes':
            cli.create_indexes(args.pattern)
        elif args.command == 'load-models':
            cli.load_models()
        elif args.command == 'preload-models':
            cli.preload_models()
        elif args.command == 'list-models':
            cli.list_models(args.pattern)
        else:
            parser.print_help()
            sys.exit(1)
    except (DocbridgeError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
