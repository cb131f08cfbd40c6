"""Errors raised while converting manifests to cdk8s."""


class Kube2CDK8SError(Exception):
    """Base class for conversion failures"""


class ConversionError(Kube2CDK8SError):
    """Raised when the external converter cannot translate a manifest.

    Attributes:
        path: Path of the manifest handed to the converter
        output: Console output of the converter, if any
    """

    def __init__(self, message, path=None, output=""):
        super().__init__(message)
        self.path = path
        self.output = output


class MetadataError(Kube2CDK8SError):
    """Raised when `kind` or `metadata.name` cannot be resolved for a manifest"""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path
