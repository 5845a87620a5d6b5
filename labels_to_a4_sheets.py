#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Lay out GTIN-13/GTIN-14 barcode labels on A4 label sheets.
"""

# local repo modules
import gtin_label_sheets.cli


if __name__ == "__main__":
	gtin_label_sheets.cli.main()
