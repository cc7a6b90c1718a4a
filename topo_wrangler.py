#!/usr/bin/env python3
"""
TopoWrangler

This script reads a pin-multiplexer topology description (peripheral inputs, mux selectors, pads) and
generates typed constant tables for C, Rust and Python, plus a JSON manifest. Every generated enumeration
type also gets an alias under the fixed external name that the serialization layer expects.

Usage:
    python topo_wrangler.py --input <topology_file> --output <output_dir> [--language <lang> ...]
                            [--output-name <name>] [--alias-pattern <pattern>] [--alias DOMAIN=NAME ...]
                            [--unknown-sentinel] [--type-suffix <suffix>] [--prefix <prefix>] [--verbose]

Arguments:
    --input, -i        : Path to the topology file (.topo text, or .json)
    --output, -o       : Directory where output files will be generated
    --language, -l     : Output formats (c, rust, python, json, or all). Default: all
                         Comma-separated values are accepted (e.g., --language c,rust)
    --output-name, -n  : Base name for output files without extension (default: input filename)
    --alias-pattern    : Fallback external name pattern for domains without an explicit alias.
                         Placeholders: {domain}, {name}, {category}, {type}  (e.g. "{domain}_t")
    --alias            : Explicit external name for one domain, as DOMAIN=NAME (repeatable)
    --unknown-sentinel : Emit an "unknown" constant per domain for unrecognized encodings
    --type-suffix      : Suffix appended to generated enumeration type names (default: Type)
    --prefix           : Extra leading word for every generated type and constant name
    --verbose, -v      : Print debug information to stderr

Environment overrides:
    TW_INPUT_FILE, TW_OUTPUT_DIR, TW_OUTPUT_NAME, TW_LANGUAGE, TW_ALIAS_PATTERN, TW_VERBOSE

Example:
    python topo_wrangler.py --input pinmux.topo --output ./generated
    python topo_wrangler.py --input pinmux.topo --output ./generated --language c rust --unknown-sentinel
    python topo_wrangler.py --input pinmux.json --output ./generated --alias-pattern "{domain}_t"
"""

import argparse
import os
import sys
import tempfile
from typing import Dict, List, Optional, Tuple

from earlymodel_to_model import build_topology_model
from generators.alias_resolver import AliasResolver, AliasRules, AliasTable
from generators.c_generator import generate_c_header
from generators.emission_engine import Emission, EmissionConfig, EmissionEngine
from generators.json_generator import generate_json_text
from generators.python3_generator import generate_python3_code
from generators.rust_generator import generate_rust_code
from model import TopologyModel
from model_debug import dump_early_topology, dump_topology
from symbol_namer import SymbolNamer
from topo_file_loader import load_topo_file
from topology_errors import TopologyError

LANGUAGES = ['c', 'rust', 'python', 'json']

LANGUAGE_EXTENSIONS = {
    'c': '.h',
    'rust': '.rs',
    'python': '.py',
    'json': '.json',
}


class TopologyConverter:
    """
    Handles the conversion of a topology description into generated sources.
    Loading, validation and rendering all happen in memory; files are only written once every
    requested output has rendered successfully.
    """

    def __init__(self, input_file: str, output_dir: str, output_name: Optional[str] = None,
                 alias_rules: Optional[AliasRules] = None, emission_config: Optional[EmissionConfig] = None,
                 namer: Optional[SymbolNamer] = None, verbose: bool = False):
        """
        Initialize the converter with input file and output directory.

        Args:
            input_file: Path to the topology file
            output_dir: Directory where output files will be generated
            output_name: Base name for output files without extension (default: input filename)
            alias_rules: Where external alias names come from
            emission_config: Emission options (unknown sentinel)
            namer: Symbol namer (prefix and type suffix)
            verbose: Whether to print debug information (default: False)
        """
        self.input_file = input_file
        self.output_dir = output_dir
        self.alias_rules = alias_rules or AliasRules()
        self.emission_config = emission_config or EmissionConfig()
        self.namer = namer or SymbolNamer()
        self.verbose = verbose
        self.model: Optional[TopologyModel] = None

        if output_name is None:
            self.output_name = os.path.splitext(os.path.basename(input_file))[0]
        else:
            self.output_name = output_name

    def debug_print(self, message: str) -> None:
        if self.verbose:
            print(f"[DEBUG] {message}", file=sys.stderr)

    def parse_input_file(self) -> TopologyModel:
        early_model = load_topo_file(self.input_file)
        if self.verbose:
            self.debug_print(dump_early_topology(early_model))
        self.model = build_topology_model(early_model, verbose=self.verbose)
        if self.verbose:
            self.debug_print(dump_topology(self.model))
        return self.model

    def build(self) -> Tuple[Emission, AliasTable]:
        if self.model is None:
            self.parse_input_file()
        engine = EmissionEngine(self.namer, self.emission_config, verbose=self.verbose)
        emission = engine.emit(self.model)
        aliases = AliasResolver(self.alias_rules, verbose=self.verbose).resolve(emission)
        return emission, aliases

    def render(self, languages: List[str]) -> Dict[str, str]:
        """Render every requested language. Returns a dict mapping output filename to file content."""
        emission, aliases = self.build()
        outputs = {}
        for language in languages:
            filename = self.output_name + LANGUAGE_EXTENSIONS[language]
            if language == 'c':
                outputs[filename] = generate_c_header(emission, aliases, self.output_name)
            elif language == 'rust':
                outputs[filename] = generate_rust_code(emission, aliases)
            elif language == 'python':
                outputs[filename] = generate_python3_code(emission, aliases)
            elif language == 'json':
                outputs[filename] = generate_json_text(emission, aliases)
            else:
                raise ValueError(f"Unsupported language: {language}")
            self.debug_print(f"Rendered {filename} ({len(outputs[filename])} bytes)")
        return outputs

    def write_outputs(self, outputs: Dict[str, str]) -> List[str]:
        """
        Write rendered outputs. Each file is written to a temporary file in the output directory and moved
        into place, so readers never observe a half-written file. Files whose content is unchanged are left
        untouched. Returns the paths that were written.
        """
        os.makedirs(self.output_dir, exist_ok=True)
        # mkstemp creates files as 0600; give outputs the mode a plain open() would
        umask = os.umask(0)
        os.umask(umask)
        written = []
        for filename, content in outputs.items():
            path = os.path.join(self.output_dir, filename)
            if os.path.exists(path):
                with open(path, 'r', encoding='utf-8', newline='') as f:
                    if f.read() == content:
                        self.debug_print(f"Unchanged: {path}")
                        continue
            fd, tmp_path = tempfile.mkstemp(prefix=f".{filename}.", dir=self.output_dir)
            try:
                with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                    f.write(content)
                os.chmod(tmp_path, 0o666 & ~umask)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
            written.append(path)
        return written

    def convert(self, languages: List[str]) -> List[str]:
        outputs = self.render(languages)
        return self.write_outputs(outputs)


def parse_alias_assignments(assignments: Optional[List[str]]) -> Dict[str, str]:
    explicit = {}
    for assignment in assignments or []:
        domain, sep, external = assignment.partition('=')
        if not sep or not domain.strip() or not external.strip():
            raise argparse.ArgumentTypeError(f"invalid alias '{assignment}' (expected DOMAIN=NAME)")
        explicit[domain.strip()] = external.strip()
    return explicit


def normalize_languages(values: Optional[List[str]]) -> List[str]:
    """Split comma-separated values, expand 'all', drop duplicates and keep the canonical order."""
    if not values:
        return list(LANGUAGES)
    requested = []
    for value in values:
        requested.extend(v.strip().lower() for v in value.replace(',', ' ').split())
    for lang in requested:
        if lang not in LANGUAGES and lang != 'all':
            raise argparse.ArgumentTypeError(
                f"invalid choice: '{lang}' (choose from {', '.join(LANGUAGES + ['all'])})"
            )
    if 'all' in requested:
        return list(LANGUAGES)
    return [lang for lang in LANGUAGES if lang in requested]


def parse_arguments(argv: Optional[List[str]] = None):
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        description="Generate typed constant tables and aliases from a topology description",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument('--input', '-i', help='Path to the topology file (.topo or .json)')
    parser.add_argument('--output', '-o', help='Directory where output files will be generated')
    parser.add_argument('--language', '-l', nargs='+',
                        help='Output formats (c, rust, python, json, or all)')
    parser.add_argument('--output-name', '-n', help='Base name for output files without extension (default: input filename)')
    parser.add_argument('--alias-pattern', help='Fallback external alias name pattern, e.g. "{domain}_t"')
    parser.add_argument('--alias', action='append', metavar='DOMAIN=NAME',
                        help='Explicit external alias name for a domain (repeatable)')
    parser.add_argument('--unknown-sentinel', action='store_true',
                        help='Emit an unknown sentinel constant per domain')
    parser.add_argument('--type-suffix', default='Type', help='Suffix for generated enumeration type names')
    parser.add_argument('--prefix', default='', help='Extra leading word for generated names')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output for debugging')

    args = parser.parse_args(argv)

    # Environment variables override command line values
    args.input = os.environ.get('TW_INPUT_FILE', args.input)
    args.output = os.environ.get('TW_OUTPUT_DIR', args.output)
    args.output_name = os.environ.get('TW_OUTPUT_NAME', args.output_name)
    args.alias_pattern = os.environ.get('TW_ALIAS_PATTERN', args.alias_pattern)
    if os.environ.get('TW_VERBOSE', '').lower() in ('1', 'true', 'yes', 'on'):
        args.verbose = True
    languages = args.language
    if 'TW_LANGUAGE' in os.environ:
        languages = [os.environ['TW_LANGUAGE']]

    if not args.input:
        parser.error("the following arguments are required: --input/-i (or TW_INPUT_FILE)")
    if not args.output:
        parser.error("the following arguments are required: --output/-o (or TW_OUTPUT_DIR)")
    try:
        args.language = normalize_languages(languages)
        args.alias = parse_alias_assignments(args.alias)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    return args


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point of the script.
    """
    args = parse_arguments(argv)

    converter = TopologyConverter(
        args.input,
        args.output,
        output_name=args.output_name,
        alias_rules=AliasRules(explicit=args.alias, pattern=args.alias_pattern),
        emission_config=EmissionConfig(include_unknown_sentinel=args.unknown_sentinel),
        namer=SymbolNamer(prefix=args.prefix, type_suffix=args.type_suffix),
        verbose=args.verbose,
    )

    try:
        written = converter.convert(args.language)
    except TopologyError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Topology generation failed; no files were written.", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for path in written:
        print(f"Wrote {path}")
    print("Topology generation completed successfully.")
    return 0


if __name__ == '__main__':
    sys.exit(main())
