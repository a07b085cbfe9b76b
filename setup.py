# setup.py
"""Minimal setup for the AI note tagger."""

from setuptools import setup, find_packages

setup(
    name="ai_tagger",
    version="0.1.0",
    description="LLM-driven tag generation for Markdown notes",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={"ai_tagger": ["templates/*.jinja"]},
    python_requires=">=3.8",
    install_requires=[
        "loguru",
        "jinja2",
        "python-frontmatter",
        "requests",
        "python-dotenv",
    ],
    extras_require={
        "dev": ["pytest>=6.0"]
    },
    entry_points={
        'console_scripts': [
            'ai-tagger=ai_tagger.cli.console:console_main',
        ],
    },
)
