"""
Entry point for the Azure Resource Manager cmdlets package.
Allows running the CLI as: python -m azure_rm_cmdlets
"""

from .cli import main

if __name__ == "__main__":
    main()
