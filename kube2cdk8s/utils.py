import logging
import os
import tempfile
from functools import reduce

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .exceptions import MetadataError

logger = logging.getLogger(__name__)

yaml = YAML(typ="safe")

TEMP_PREFIX = "kube2cdk8s-"


class TempArtifact:
    """A temporary file that is removed when its owner is done with it

    Use as a context manager so the file is released on every exit path.
    Releasing a file that no longer exists raises FileNotFoundError.
    """

    def __init__(self, path):
        self.path = path
        self.released = False

    @classmethod
    def create(cls, data, suffix=".yaml"):
        """Write data to a new, uniquely named file in the temp directory

        Args:
            data (bytes): Content of the file
            suffix (string): File extension

        Returns:
            TempArtifact: handle to the new file
        """
        fd, path = tempfile.mkstemp(prefix=TEMP_PREFIX, suffix=suffix)
        try:
            with os.fdopen(fd, "wb") as tmpfile:
                tmpfile.write(data)
        except OSError:
            os.remove(path)
            raise

        logger.debug("Created file %s", path)
        return cls(path)

    def release(self):
        os.remove(self.path)
        self.released = True
        logger.debug("Removed file %s", self.path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.released:
            return
        if exc_type is None:
            self.release()
            return

        # Keep the error that is already propagating
        try:
            self.release()
        except FileNotFoundError:
            logger.debug("%s was already removed", self.path)

    def __repr__(self):
        return f"TempArtifact({self.path!r})"


class ManifestConfig:
    """Key lookup over a single YAML manifest

    A new instance is parsed for every path, so nothing carries over
    from one manifest to the next.
    """

    def __init__(self, data, path=None):
        self.data = data
        self.path = path

    @classmethod
    def from_path(cls, path):
        try:
            with open(path, "r", encoding="utf-8") as in_file:
                data = yaml.load(in_file)
        except (YAMLError, UnicodeDecodeError) as error:
            raise MetadataError(f"{path} is not a valid YAML file: {error}", path)
        except OSError as error:
            raise MetadataError(f"Could not read {path}: {error}", path)

        if not isinstance(data, dict):
            raise MetadataError(f"{path} does not contain a YAML mapping", path)

        return cls(data, path)

    def get(self, key, default=None):
        """Look up a dotted key such as `metadata.name`"""

        def step(node, part):
            if isinstance(node, dict):
                return node.get(part)
            return None

        value = reduce(step, key.split("."), self.data)
        return default if value is None else value

    def get_string(self, key):
        value = self.get(key, "")
        if isinstance(value, (dict, list)):
            return ""
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)


def load_manifest_metadata(path):
    """Returns the kind and name of the manifest at path

    Args:
        path (string): Path to a single Kubernetes manifest

    Returns:
        tuple: (kind, name)
    """
    config = ManifestConfig.from_path(path)
    kind = config.get_string("kind")
    name = config.get_string("metadata.name")

    if not kind:
        raise MetadataError(f"Manifest {path} has no kind", path)
    if not name:
        raise MetadataError(f"Manifest {path} has no metadata.name", path)

    return kind, name
