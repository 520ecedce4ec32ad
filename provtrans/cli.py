"""
provtrans CLI

Command line tool that translates a YAML source config into the JSON
config consumed by the provisioning agent.
"""

import json
import sys
from typing import Any, Callable, Dict, Optional, Tuple

import click
import pydantic
import yaml

from . import __version__
from .core.options import TranslateOptions
from .core.report import Report
from .core.translation import TranslationSet
from .exceptions.errors import UsageError
from .schema import destination as dst
from .schema import source as src
from .translate.v1_4_exp import translate_config
from .utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

VersionTranslator = Callable[
    [src.Config, TranslateOptions], Tuple[dst.Config, TranslationSet, Report]
]

TRANSLATORS: Dict[Tuple[str, str], VersionTranslator] = {
    (src.VARIANT, src.VERSION): translate_config,
}


def load_source(text: str) -> src.Config:
    """
    Parse and validate a source document

    Raises:
        UsageError: Invalid YAML, schema errors, or unsupported version
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise UsageError(f"Invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise UsageError("Config must be a YAML mapping")

    key = (data.get("variant"), data.get("version"))
    if key not in TRANSLATORS:
        raise UsageError(
            f"Unsupported config variant/version: {key[0]!r} {key[1]!r}",
            {"supported": [f"{v} {ver}" for v, ver in TRANSLATORS]},
        )
    try:
        return src.Config.model_validate(data)
    except pydantic.ValidationError as e:
        raise UsageError(f"Invalid config: {e}") from e


def translate_text(
    text: str, options: TranslateOptions
) -> Tuple[dst.Config, TranslationSet, Report]:
    """Load a source document and run the matching version translator"""
    config = load_source(text)
    fn = TRANSLATORS[(config.variant, config.version)]
    return fn(config, options)


def render_output(config: dst.Config, pretty: bool) -> str:
    data: Dict[str, Any] = config.to_dict()
    if pretty:
        return json.dumps(data, indent=2, sort_keys=False) + "\n"
    return json.dumps(data, separators=(",", ":"))


@click.group()
@click.version_option(version=__version__)
def cli():
    """provtrans - translate provisioning configs"""
    pass


@cli.command()
@click.argument("document", type=click.File("r"), default="-")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Write output to a file")
@click.option(
    "--files-dir",
    "-d",
    type=click.Path(exists=True, file_okay=False),
    help="Directory for local files and trees",
)
@click.option("--no-auto-compression", is_flag=True, help="Never gzip embedded contents")
@click.option("--pretty", "-p", is_flag=True, help="Indent the output")
@click.option("--strict", is_flag=True, help="Fail on warnings")
@click.option("--debug", is_flag=True, help="Log translation details to stderr")
def translate(document, output, files_dir, no_auto_compression, pretty, strict, debug):
    """Translate DOCUMENT (default: stdin) to the provisioning agent's JSON config"""
    configure_logging("DEBUG" if debug else "WARNING")
    options = TranslateOptions.from_env().with_overrides(
        files_dir=files_dir,
        no_resource_auto_compression=no_auto_compression or None,
        debug_print_translations=debug or None,
    )

    try:
        config, _, report = translate_text(document.read(), options)
    except UsageError as e:
        raise click.ClickException(e.message)

    for entry in report:
        click.echo(str(entry), err=True)

    if report.has_errors() or (strict and report.has_warnings()):
        logger.debug("translation failed", errors=len(report.errors()))
        sys.exit(1)

    out = render_output(config, pretty)
    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(out)
    else:
        click.echo(out)


def main(argv: Optional[list] = None) -> None:
    cli.main(args=argv, prog_name="provtrans")


if __name__ == "__main__":
    main()
