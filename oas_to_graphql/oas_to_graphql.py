import json
import logging
from pathlib import Path

import click

from .config import GeneratorConfig
from .converter import Converter
from .document import OpenApiDocument
from .errors import ConverterError
from .output import OutputWriter
from .prompt import PromptFactory, RecorderPrompt, recordings


@click.command()
@click.option("--output-file", "-o", default=None, type=click.Path(dir_okay=False, resolve_path=True), help="The output file (stdout when omitted)")
@click.option(
    "--input-type",
    "-i",
    default="prompt",
    type=click.Choice(PromptFactory.INPUT_TYPES),
    help="prompt: ask for every decision; record: ask and record every answer; skip: answer yes to everything",
)
@click.option(
    "--recording",
    "-r",
    default=None,
    type=click.Path(exists=True, dir_okay=False, resolve_path=True),
    help="Replay a recording: one 'y', 'n' or 's' per line. Overrides --input-type",
)
@click.option("--save-recording", default=None, type=click.Path(dir_okay=False, resolve_path=True), help="Where record mode writes the recording (stderr when omitted)")
@click.option("--mode", "-m", default="sdl", type=click.Choice(["sdl", "select"]), help="Generate SDL types or selection sets")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--verbose", "-v", count=True, help="-v for progress, -vv for traversal traces")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
def oas_to_graphql(output_file, input_type, recording, save_recording, mode, config, verbose, source):
    """Generate GraphQL from an OAS/Swagger document."""
    logging.basicConfig(
        level=[logging.WARNING, logging.INFO, logging.DEBUG][min(verbose, 2)],
        format="%(levelname)s %(name)s: %(message)s",
    )

    if config is not None:
        with open(config) as f:
            config = GeneratorConfig.from_dict(json.load(f))
    else:
        config = GeneratorConfig()

    try:
        answers = recordings.load(recording) if recording is not None else None
        prompt = PromptFactory.from_options(input_type, answers)

        document = OpenApiDocument.from_file(source)
        converter = Converter(document, config, prompt)
        out = converter.generate_sdl() if mode == "sdl" else converter.generate_selection()

        writer = OutputWriter()
        if output_file is not None:
            writer.write(Path(output_file), out)
        else:
            click.echo(out, nl=False)

        if isinstance(prompt, RecorderPrompt):
            if save_recording is not None:
                recordings.save(save_recording, prompt.recording)
            else:
                click.echo(recordings.to_text(prompt.recording), nl=False, err=True)
    except ConverterError as e:
        raise click.ClickException(str(e)) from e
