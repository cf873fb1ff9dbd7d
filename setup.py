import os

from setuptools import find_packages, setup

here = os.path.abspath(os.path.dirname(__file__))


def get_package_metadata():
    package_metadata = {}
    with open(os.path.join(here, "__packaging__.py")) as f:
        exec(f.read(), package_metadata)
    return package_metadata


def get_long_description():
    readme_path = os.path.join(here, "README.md")
    if not os.path.exists(readme_path):
        return ""
    with open(readme_path, "r", encoding="utf-8") as fh:
        return fh.read()


about = get_package_metadata()
version = about.get("__version__")
license = about.get("__license__")
if not version or not license:
    raise ValueError("could not find project metadata!")

setup(
    name="strimzi-test-container",
    version=version,
    author=about.get("__author__"),
    description="Single-node Kafka test containers (Strimzi images) for integration tests,"
    + " built on top of testcontainers.",
    long_description_content_type="text/markdown",
    long_description=get_long_description(),
    license=license,
    packages=find_packages(include=("strimzi_test_container*",)),
    package_data={"strimzi_test_container": ["resources/supported_kafka.versions"]},
    classifiers=[
        "Operating System :: OS Independent",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Framework :: Pytest",
        "Topic :: Software Development :: Testing",
    ],
    python_requires=">=3.9",
    install_requires=about["get_install_requires"](here),
    extras_require={"test": ["pytest>=7.0"]},
    entry_points={
        "console_scripts": [
            "strimzi-test-container = strimzi_test_container.cli:app",
        ],
        "pytest11": [
            "strimzi_test_container = strimzi_test_container.pytest_plugin",
        ],
    },
)
