"""Setup configuration for Azure Resource Manager cmdlets package."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="azure-rm-cmdlets",
    version="1.0.0",
    author="OI Technologies Platform Engineering",
    author_email="platform-engineering@example.com",
    description="CLI cmdlets for Data Lake Analytics jobs, Azure Monitor metric dimensions, Intune locations and network security groups",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/pacorreia/azure-rm-cmdlets",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: Other/Proprietary License",
        "Operating System :: OS Independent",
        "Topic :: System :: Systems Administration",
        "Development Status :: 4 - Beta",
    ],
    python_requires=">=3.8",
    install_requires=[
        "azure-identity>=1.14.0",
        "azure-core>=1.29.0",
        "azure-common>=1.1.28",
        "azure-mgmt-datalake-analytics>=0.6.0",
        "azure-mgmt-monitor>=6.0.0",
        "azure-mgmt-network>=25.0.0",
        "azure-mgmt-subscription>=3.1.0",
        "msrest>=0.7.1",
        "click>=8.1.7",
        "tabulate>=0.9.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.4.2",
        "rich>=13.7.0",
        "prompt-toolkit>=3.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "azure-rm-cmdlets=azure_rm_cmdlets.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
