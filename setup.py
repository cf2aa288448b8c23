"""Setup script for the urlquery package."""

from setuptools import find_packages, setup

with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name="urlquery",
    version="0.1.0",
    description="Declarative mapping between typed Python objects and URL query strings.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["urlquery", "urlquery.*"]),
    include_package_data=True,
    install_requires=[
        "pydantic>=2.0",
    ],
    extras_require={
        "fastapi": [
            "fastapi",
        ],
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.24.0",
            "fastapi",
            "pre-commit>=3.0.0",
            "black",  # Code formatter
            "isort",  # Import sorting
            "flake8",  # Linting
            "mypy",  # Type checking
            "pytest-cov",  # Coverage reporting
        ],
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.24.0",  # FastAPI TestClient
            "fastapi",
            "pytest-cov",  # Coverage reporting
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
)
