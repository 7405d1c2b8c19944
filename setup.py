"""Setup script for Workspace Insight"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = ""
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="workspace-insight",
    version="1.0.0",
    description="Static analysis of Go modules: structure, complexity, dependencies, coverage",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Quality Assurance",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=[
        "tree-sitter>=0.25.0",
        "tree-sitter-go>=0.23.0",
        "typer>=0.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "workspace-insight=workspace_insight.cli:main",
        ],
    },
    keywords="go golang static-analysis workspace cyclomatic-complexity coverage",
)
