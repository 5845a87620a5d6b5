"""
Pytest configuration for local imports and shared helpers.
"""

# Standard Library
import os
import sys

# PIP3 modules
import PIL.Image
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()

import gtin_label_sheets.gtin


RETAIL_CODES = ["7891234567895", "4006381333931", "5901234123457"]
LOGISTICS_CODES = ["17891234567892", "10012345678902"]


#============================================
def fake_barcode(code: str, kind: gtin_label_sheets.gtin.CodeKind) -> PIL.Image.Image:
	"""
	Stand-in barcode renderer producing a wide white image.
	"""
	return PIL.Image.new("RGB", (400, 200), "white")


#============================================
@pytest.fixture
def fake_renderer():
	"""
	Barcode renderer that never touches python-barcode.
	"""
	return fake_barcode


#============================================
@pytest.fixture
def retail_items() -> list[gtin_label_sheets.gtin.LabelItem]:
	"""
	Eight valid retail items.
	"""
	items = []
	for index in range(8):
		code = RETAIL_CODES[index % len(RETAIL_CODES)]
		items.append(
			gtin_label_sheets.gtin.make_item(
				f"Item {index}",
				code,
				gtin_label_sheets.gtin.CodeKind.RETAIL,
			)
		)
	return items
