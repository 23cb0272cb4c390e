"""
JsValidation CLI Entry Point
============================

Allows running jsvalidation as a module: python -m jsvalidation
"""

from jsvalidation.cli.main import main

if __name__ == "__main__":
    main()
