import os
import tempfile

import pytest
from ruamel.yaml import YAML

from kube2cdk8s.exceptions import ConversionError

yaml = YAML(typ="safe")

SERVICE_ACCOUNT = """
apiVersion: v1
kind: ServiceAccount
metadata:
  name: my-service-account
  namespace: my-namespace
"""

DEPLOYMENT = """
apiVersion: apps/v1
kind: Deployment
metadata:
  name: my-deployment
spec:
  replicas: 3
"""


def generate_typescript(manifest):
    """Mimics the shape of kube2pulumi TypeScript output"""
    kind = manifest.get("kind", "")
    name = (manifest.get("metadata") or {}).get("name", "")
    var = name.replace("-", "_") + kind
    return "\n".join([
        'import * as pulumi from "@pulumi/pulumi";',
        'import * as kubernetes from "@pulumi/kubernetes";',
        "",
        f'const {var} = new kubernetes.core.v1.{kind}("{var}", {{',
        f'    apiVersion: "{manifest.get("apiVersion", "")}",',
        f'    kind: "{kind}",',
        "    metadata: {",
        f'        name: "{name}",',
        "    },",
        "});",
        "",
    ])


class FakeConverter:
    """Stands in for kube2pulumi, writing generated code to a temp file"""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.calls = []
        self.outputs = []

    def __call__(self, path, language):
        with open(path) as in_file:
            manifest = yaml.load(in_file)
        self.calls.append(manifest)

        if not isinstance(manifest, dict) or manifest.get("kind") == self.fail_on:
            raise ConversionError(f"cannot convert {path}", path)

        fd, out_path = tempfile.mkstemp(suffix=".ts")
        with os.fdopen(fd, "w") as out_file:
            out_file.write(generate_typescript(manifest))
        self.outputs.append(out_path)
        return out_path, ""


@pytest.fixture
def tmpdir_only(tmp_path, monkeypatch):
    """Points the process temp directory at an empty, test-owned directory"""
    workdir = tmp_path / "tmp"
    workdir.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(workdir))
    return workdir


@pytest.fixture
def converter():
    return FakeConverter()


@pytest.fixture
def manifest_file(tmp_path):
    def write(content, name="manifest.yaml"):
        path = tmp_path / name
        path.write_text(content)
        return str(path)

    return write
