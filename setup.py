from setuptools import setup, find_packages

setup(
    name="cli-commander",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.29",
        "pydantic>=2.5",
        "structlog>=24.1",
        "PyYAML>=6.0",
        "python-dotenv>=1.0",
        "python-multipart>=0.0.9",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "httpx>=0.27",
        ],
    },
    entry_points={
        "console_scripts": [
            "cli-commander=cli_commander.core.cli:main",
        ],
    },
    description="HTTP gateway that runs registered administrative commands as the calling user.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Framework :: FastAPI",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
