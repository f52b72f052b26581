"""Setup script for dbsampler."""

from setuptools import find_packages, setup

setup(
    name="dbsampler",
    version="0.1.0",
    description="Copy a sampled, reference-consistent and cleaned database subset",
    author="dbsampler Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "sqlalchemy>=2.0.0",  # Database access, reflection and DDL
        "networkx>=3.0",  # Table dependency graph handling
        "typer>=0.9.0",  # Modern CLI framework
        "rich>=13.0.0",  # CLI output formatting
        "psycopg2-binary>=2.9.0",  # PostgreSQL driver
        "pyyaml>=6.0",  # Configuration handling
        "python-dotenv>=1.0.0",  # .env loading for config variables
    ],
    package_data={
        "dbsampler": ["py.typed"],
    },
    extras_require={
        "mysql": [
            "pymysql>=1.0.0",  # MySQL / MariaDB driver
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.1.0",
            "black>=22.1.0",
            "isort>=5.10.1",
            "flake8>=4.0.1",
            "mypy>=1.0.0",  # Type checking
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "dbsampler=dbsampler.cli.main:cli",
        ],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Database",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
