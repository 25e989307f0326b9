"""
Setup script for the rps-lobby package.

The public API (rules.py, players.py, errors.py, server.py, cli.py)
and the internal session layer (_session/, _shared/) ship as plain
Python source.
"""

from setuptools import setup, find_packages

setup(
    name="rps-lobby",
    version="1.0.0",
    description="Rock-Paper-Scissors-style games with custom rules and a multiplayer lobby",
    author="RPS Lobby contributors",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx>=0.27.0",
        ],
        "dev": [
            "pytest>=7.4",
            "httpx>=0.27.0",
            "build",
            "wheel",
        ],
    },
    entry_points={
        "console_scripts": [
            "rps-lobby=rps_lobby.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment",
    ],
)
