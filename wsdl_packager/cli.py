"""CLI for wsdl-packager."""

import argparse
import logging
import os
import sys

from wsdl_packager.converter import Converter
from wsdl_packager.domain.exceptions import ConversionError
from wsdl_packager.domain.models import ConvertOptions, Credentials
from wsdl_packager.transform import DEFAULT_TEMPLATE_DIR, list_templates


def _parse_params(values: list[str] | None) -> dict[str, str]:
    """Parse repeated ``KEY=VALUE`` arguments, keeping their order."""
    params: dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise argparse.ArgumentTypeError(f"Invalid parameter '{item}', expected KEY=VALUE")
        params[key] = value
    return params


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


def convert_command(args: argparse.Namespace) -> int:
    """Run a conversion and write either the archive or the unzipped tree."""
    options = ConvertOptions(
        package_type=args.type,
        template_dir=args.template_dir,
        base_path=args.base_path,
        base_url=args.base_url,
        credentials=Credentials(args.username, args.password, args.domain),
        parameters=_parse_params(args.param),
        expand_location_lists=not args.no_list_expansion,
        timeout=args.timeout,
        max_workers=args.workers,
    )
    converter = Converter(args.locations, options)
    output = args.output or os.getcwd()

    try:
        if not converter.definitions:
            print('Error: no WSDL document could be retrieved', file=sys.stderr)
            return 1

        print(f'Converting {len(converter.definitions)} WSDL document(s)...')
        if args.keep_dir:
            converter.output_directory = output
            os.makedirs(output, exist_ok=True)
            result = converter.convert()
            print(f'Done! Generated {len(result.packages)} package(s): {", ".join(result.packages)}')
            print(f'Output: {result.output_dir}')
        else:
            archive = converter.create_archive(output, args.package_name)
            print(f'Done! Package: {archive.package_name}')
            print(f'Output: {archive.path}')
    except ConversionError as e:
        print(f'Error: {e}', file=sys.stderr)
        if not args.keep_dir:
            converter.cleanup()
        return 1
    return 0


def templates_command(args: argparse.Namespace) -> int:
    template_dir = args.template_dir or DEFAULT_TEMPLATE_DIR
    types = list_templates(template_dir)
    if not types:
        print(f'No templates found in {template_dir}', file=sys.stderr)
        return 1
    for t in types:
        print(f'  {t}')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='wsdl-packager', description='Generate code packages from WSDL documents')
    subparsers = parser.add_subparsers(dest='command')

    # convert command
    convert_parser = subparsers.add_parser('convert', help='Convert WSDL documents into a package archive')
    convert_parser.add_argument('locations', help='WSDL locations separated by ; , | newline or tab')
    convert_parser.add_argument('--type', '-t', required=True, help='Package type (template name)')
    convert_parser.add_argument('--template-dir', help='Directory holding {type}.xslt templates')
    convert_parser.add_argument('--base-path', default='.', help='Root for folder/include copy sources (default: .)')
    convert_parser.add_argument('--base-url', help='Base URL for locations without a scheme')
    convert_parser.add_argument('--username', '-u', help='Username for retrieving WSDL documents')
    convert_parser.add_argument('--password', '-p', help='Password for retrieving WSDL documents')
    convert_parser.add_argument('--domain', '-d', help='Domain for retrieving WSDL documents')
    convert_parser.add_argument('--param', action='append', metavar='KEY=VALUE',
                                help='Transform parameter (repeatable)')
    convert_parser.add_argument('--package-name', help='Archive name (default: package names joined by _)')
    convert_parser.add_argument('--output', '-o', help='Output directory (default: current directory)')
    convert_parser.add_argument('--keep-dir', action='store_true',
                                help='Write the unzipped package tree to --output instead of an archive')
    convert_parser.add_argument('--no-list-expansion', action='store_true',
                                help='Do not treat non-markup responses as lists of further locations')
    convert_parser.add_argument('--timeout', type=float, default=30.0, help='Fetch timeout in seconds (default: 30)')
    convert_parser.add_argument('--workers', type=int, default=1, help='Parallel import resolution workers')
    convert_parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    convert_parser.set_defaults(func=convert_command)

    # templates command
    templates_parser = subparsers.add_parser('templates', help='List available package types')
    templates_parser.add_argument('--template-dir', help='Directory holding {type}.xslt templates')
    templates_parser.set_defaults(func=templates_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not getattr(args, 'func', None):
        parser.print_help()
        return 0

    _configure_logging(getattr(args, 'verbose', False))
    try:
        return args.func(args)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))


if __name__ == '__main__':
    sys.exit(main())
