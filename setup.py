"""
Setup script for vimflow.

vimflow is a continuous Vim tutorial. The learner edits in a real editor
while vimflow samples its state and advances through the exercise goals:

1. Goal compiler - declarative exercise content to typed goals
2. Goal tracking - sequential, any-order and parallel flows
3. Live feedback - console panels and a progress file for the editor pane

The 'vimflow' command is the entry point.
"""

from setuptools import find_packages, setup

setup(
    name="vimflow",
    version="0.3.0",
    description="Continuous Vim practice: goals advance as you edit",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="vimflow contributors",
    packages=find_packages(include=["vimflow", "vimflow.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "vimflow=vimflow.cli:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Text Editors",
    ],
    keywords="vim neovim tutorial practice cli education",
)
