from setuptools import setup, find_packages

setup(
    name="kube2cdk8s",
    description="Convert Kubernetes manifests to cdk8s TypeScript",
    version="0.1.0",
    packages=find_packages(exclude=['tests']),
    install_requires=["ruamel.yaml", "click"],
    extras_require={"test": ["pytest"]},

    python_requires=">=3.6",
    entry_points={
        "console_scripts": ["kube2cdk8s=kube2cdk8s.cli:main"],
    },
)
