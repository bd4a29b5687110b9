from setuptools import setup, find_packages

setup(
    name="modkit",
    version="1.0.0",
    packages=find_packages(include=["modkit", "modkit.*", "cli", "cli.*"]),
    install_requires=[
        "click>=8.1.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "modkit=cli.main:main",
        ],
    },
    author="modkit",
    author_email="your.email@example.com",
    description="Dependency injection and module lifecycle container",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
)
