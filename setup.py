# setup.py
from setuptools import setup, find_packages

setup(
    name="chainlisp",
    version="0.1.0",
    description="A prototype evaluator for a small Scheme dialect, with an LSP server and a TCP REPL",
    packages=find_packages(include=["chainlisp", "chainlisp.*", "chainlisp_lsp", "chainlisp_lsp.*"]),
    package_data={"chainlisp": ["prelude/*.scm"]},
    python_requires=">=3.10",
    install_requires=[
        "pygls>=1.0,<2",
        "lsprotocol",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": [
            "chainlisp=chainlisp.repl:main",
            "chainlisp-ls=chainlisp_lsp.server:main",
            "chainlisp-repl-server=chainlisp_lsp.repl_server:main",
        ],
    },
    zip_safe=False,
)
