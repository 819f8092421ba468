from setuptools import setup, find_packages
from pathlib import Path

this_dir = Path(__file__).parent

readme = (this_dir / "README.md").read_text(encoding="utf-8")

setup(
    name="sparsepred",
    version="0.1.0",
    description="Sparse index/value iteration and sign-transform predictors",
    long_description=readme,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "torch>=2.0",
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
