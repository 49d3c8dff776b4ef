"""CLI entry point for seqflow."""

import json
import logging
import sys

import click

from seqflow.config import OutputConfig
from seqflow.parsers import parse
from seqflow.tokenizer import tokenize, tokenize_with_spans


def render_output(text: str, config: OutputConfig) -> str:
    """Run the pipeline selected by ``config.mode`` and serialize it to JSON."""
    if config.mode == "tokens":
        data = [t.to_dict() for t in tokenize(text)]
    elif config.mode == "spans":
        data = [s.to_dict() for s in tokenize_with_spans(text)]
    else:
        data = parse(text).to_dict()
    return json.dumps(data, indent=config.indent, ensure_ascii=False) + "\n"


@click.command()
@click.argument("input", required=False, type=click.Path(exists=True))
@click.option("--tokens", "mode", flag_value="tokens", help="Print the token list instead of the AST")
@click.option("--spans", "mode", flag_value="spans", help="Print token spans (kind, text, offsets) instead of the AST")
@click.option("--indent", "-i", "indent", type=int, default=2, help="JSON indentation (0 for compact output)")
@click.option("--output", "-o", "output", type=str, default=None, help="Write output to this file instead of stdout")
@click.option("--verbose", "-v", "verbose", is_flag=True, help="Log recovered syntax problems to stderr")
def main(input: str | None, mode: str | None, indent: int, output: str | None, verbose: bool) -> None:
    """Sequence diagram DSL to JSON syntax tree."""
    config = OutputConfig(mode=mode or "ast", indent=indent or None, verbose=verbose)
    if config.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr, format="%(name)s: %(message)s")

    if input:
        try:
            with open(input, encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            click.echo(f"error: cannot read '{input}': {e}", err=True)
            sys.exit(1)
    else:
        text = sys.stdin.read()

    try:
        rendered = render_output(text, config)
    except ValueError as e:
        click.echo(f"parse error:\n{e}", err=True)
        sys.exit(1)

    if output:
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(rendered)
        except OSError as e:
            click.echo(f"error: cannot write '{output}': {e}", err=True)
            sys.exit(1)
    else:
        click.echo(rendered, nl=False)


if __name__ == "__main__":
    main()
