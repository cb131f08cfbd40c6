import logging
import os
import re
import shutil
import subprocess
import tempfile

from . import __version__
from .exceptions import ConversionError
from .rewrite import rewrite
from .utils import TEMP_PREFIX, TempArtifact, load_manifest_metadata

logger = logging.getLogger(__name__)

TARGET_LANGUAGE = "typescript"
DOCUMENT_SEPARATOR = "---"
DEFAULT_EXECUTABLE = "kube2pulumi"
GENERATED_NAME = "index.ts"


def translate(file, multiple=False, converter=None):
    """Translates a Kubernetes manifest file to cdk8s TypeScript

    Args:
        file (string): Path to the manifest(s)
        multiple (bool): Whether the file holds several `---` separated manifests
        converter (callable): Replacement for the kube2pulumi invocation

    Returns:
        string: the cdk8s snippet(s)
    """
    logger.info("Running kube2cdk8s v%s on %s", __version__, file)

    if multiple:
        with open(file, "rb") as in_file:
            result = convert_batch(in_file.read(), converter)
    else:
        result = convert(file, converter)

    logger.info("Translation completed successfully")
    return result


def run_command(cmd):
    """Run a command, getting RC and output"""

    with subprocess.Popen(
            cmd,
            stderr=subprocess.STDOUT,
            stdout=subprocess.PIPE,
    ) as p:

        output = ""
        for line in p.stdout:
            # Regex gets rid of colour codes in the converter output
            output += re.sub(
                r'\x1b(\[.*?[@-~]|\].*?(\x07|\x1b\\))',
                '',
                line.decode()
            )
    return p.returncode, output


def run_kube2pulumi(path, language=TARGET_LANGUAGE, executable=None):
    """Converts a single manifest with the kube2pulumi CLI

    Args:
        path (string): Path to a single Kubernetes manifest
        language (string): kube2pulumi target language
        executable (string): kube2pulumi binary, defaults to $KUBE2PULUMI

    Returns:
        tuple: (path to the generated code, console output)
    """
    executable = executable or os.environ.get("KUBE2PULUMI", DEFAULT_EXECUTABLE)

    # Output goes to a private directory, then onto a name reserved by mkstemp
    workdir = tempfile.mkdtemp(prefix=TEMP_PREFIX)
    generated = os.path.join(workdir, GENERATED_NAME)

    cmd = [executable, language, "-f", path, "-o", generated]
    logger.debug("Running %s", " ".join(cmd))

    try:
        try:
            status, output = run_command(cmd)
        except FileNotFoundError:
            raise ConversionError(f"{executable} not found, is it installed?", path)

        if status != 0 or not os.path.exists(generated):
            raise ConversionError(
                f"{executable} could not convert {path}: {output.strip()}", path, output
            )

        fd, out_path = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=".ts")
        os.close(fd)
        os.replace(generated, out_path)
    finally:
        shutil.rmtree(workdir)

    return out_path, output


def convert(path, converter=None):
    """Converts a single manifest to a cdk8s snippet

    Args:
        path (string): Path to a file holding exactly one manifest
        converter (callable): Takes (path, language), returns (out_path, output)

    Returns:
        string: the rewritten snippet
    """
    converter = converter or run_kube2pulumi
    out_path, _ = converter(path, TARGET_LANGUAGE)

    with TempArtifact(out_path):
        with open(out_path, "r", encoding="utf-8") as out_file:
            code = out_file.read()

        kind, name = load_manifest_metadata(path)
        return rewrite(code, kind, name)


def split_documents(text, skip_blank=True):
    """Splits a YAML stream on the document separator

    Empty segments are always dropped. Whitespace-only segments are
    dropped as well unless skip_blank is False.
    """
    documents = []
    for segment in text.split(DOCUMENT_SEPARATOR):
        if segment == "":
            continue
        if skip_blank and not segment.strip():
            continue
        documents.append(segment)
    return documents


def convert_batch(data, converter=None, skip_blank=True):
    """Converts several `---` separated manifests, in order

    Stops at the first manifest that fails and raises its error.

    Args:
        data (bytes or string): The manifests
        converter (callable): Passed through to convert()
        skip_blank (bool): Drop whitespace-only documents

    Returns:
        string: the snippets, each followed by a newline
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8")

    documents = split_documents(data, skip_blank)
    logger.debug("Found %d documents", len(documents))

    result = ""
    for document in documents:
        with TempArtifact.create(document.encode("utf-8")) as artifact:
            result += convert(artifact.path, converter)
            result += "\n"

    return result
