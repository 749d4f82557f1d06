import json
from pathlib import Path

import click

from .errors import Ts2TypeboxError
from .logging import configure_logging
from .pipeline import CodeGeneratorConfig, OutputMode, PipelineGenerator


@click.command()
@click.option("--input", "-i", "input_path", default="types.ts", type=click.Path(dir_okay=False), help="TypeScript file containing the type declarations")
@click.option("--output", "-o", "output_path", default="generated-types.ts", type=click.Path(dir_okay=False), help="File receiving the generated TypeBox code")
@click.option("--output-stdout", is_flag=True, default=False, help="Print the generated code instead of writing a file")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--disable-autogen-comment", is_flag=True, default=False, help="Do not add the generation comment")
@click.option("--skip-type-creation", is_flag=True, default=False, help="Only emit TypeBox values, no Static types")
@click.option("--format/--no-format", "run_formatter", default=None, help="Format the output with prettier")
@click.option("--force", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--strict", is_flag=True, default=False, help="Fail on unsupported syntax and unresolved indexed access types")
@click.option("--verbose", "-v", is_flag=True, default=False)
def ts_to_typebox(
    input_path,
    output_path,
    output_stdout,
    config,
    disable_autogen_comment,
    skip_type_creation,
    run_formatter,
    force,
    strict,
    verbose,
):
    configure_logging(verbose=verbose)

    if config is not None:
        with open(config) as f:
            config = json.load(f)
            config = CodeGeneratorConfig.from_dict(config)
    else:
        config = CodeGeneratorConfig()

    # CLI flags override the config file
    if disable_autogen_comment:
        config.add_generation_comment = False
    if skip_type_creation:
        config.skip_type_creation = True
    if run_formatter is not None:
        config.formatter.enabled = run_formatter
    if force:
        config.output.mode = OutputMode.FORCE
    if strict:
        config.strict = True

    path = Path(input_path)
    if not path.exists():
        raise click.ClickException(f"Input file not found: {input_path}")
    source = path.read_text(encoding="utf-8")

    codegen = PipelineGenerator(config)
    try:
        out = codegen.generate(source)
        if output_stdout:
            click.echo(out, nl=False)
            return
        codegen.write(out, Path(output_path))
    except (Ts2TypeboxError, FileExistsError) as e:
        raise click.ClickException(str(e)) from e
