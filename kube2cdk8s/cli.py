import logging
import sys
from functools import partial

import click

from kube2cdk8s.exceptions import Kube2CDK8SError
from kube2cdk8s.translator import TARGET_LANGUAGE, run_kube2pulumi, translate


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Log temp files and converter commands.")
def main(verbose):
    """Converts Kubernetes manifests to cdk8s"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command(TARGET_LANGUAGE)
@click.option("-f", "--file", "file", required=True, help="YAML file to convert.")
@click.option(
    "-m", "--multiple", is_flag=True, help="Convert multiple YAMLs separated by ---."
)
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Write to a file instead of stdout.")
@click.option(
    "--kube2pulumi",
    "executable",
    envvar="KUBE2PULUMI",
    default="kube2pulumi",
    show_default=True,
    help="kube2pulumi executable.",
)
def typescript(file, multiple, output, executable):
    """Converts k8s YAML to cdk8s TypeScript

    FILE is the path to a single/multi Kubernetes manifest (YAML)"""
    converter = partial(run_kube2pulumi, executable=executable)
    try:
        result = translate(file, multiple, converter)
    except Kube2CDK8SError as error:
        click.echo(str(error), err=True)
        sys.exit(1)
    except OSError as error:
        click.echo(str(error), err=True)
        sys.exit(1)
    except ValueError as error:
        click.echo(f"Not a valid manifest file: {error}", err=True)
        sys.exit(1)

    if output:
        with open(output, "w") as out_file:
            out_file.write(result)
    else:
        click.echo(result, nl=False)


if __name__ == "__main__":
    main()
