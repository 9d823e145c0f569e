#!/usr/bin/env python3
import setuptools

setuptools.setup(
    name="import-order-fixer",
    version="0.1.0",
    packages=["import_order_fixer"],
    python_requires=">=3.11",
    install_requires=[
        "click",
        "pyuca",
        "tree-sitter>=0.23",
        "tree-sitter-typescript>=0.23",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "iof = import_order_fixer.cli:main",
        ],
    },
    author="",
    description="Command-line tool to check and fix the order of JavaScript and TypeScript imports",
    license="MIT",
)
