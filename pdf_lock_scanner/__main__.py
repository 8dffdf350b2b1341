#!/usr/bin/env python3
"""
Main entry point for running the PDF Lock Scanner as a module.
"""

import sys
from pdf_lock_scanner.cli import main

if __name__ == "__main__":
    sys.exit(main())
