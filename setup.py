from setuptools import setup, find_packages

setup(
    name="harness-metadata",
    version="0.1.0",
    packages=find_packages(include=["harnessmeta", "harnessmeta.*"]),
    include_package_data=True,
    install_requires=[
        "python-dotenv>=0.19.0",
        "click>=8.0.0",
        "pyyaml>=6.0.0",
        "rich>=12.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0.0"],
    },
    entry_points={
        'console_scripts': [
            'harnessmeta=harnessmeta.cli:cli',
        ],
    },
    description="Extract, validate and regenerate cached metadata of completed harness tests",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
