"""
Error types raised by the label sheet pipeline.
"""


class LabelSheetError(ValueError):
	"""
	Base class for label sheet errors.
	"""


class InvalidChecksumError(LabelSheetError):
	"""
	Code has the wrong digit count or a wrong check digit.
	"""


class EmptyDescriptionError(LabelSheetError):
	"""
	Description is blank.
	"""


class InvalidLayoutError(LabelSheetError):
	"""
	Layout cannot produce a usable grid.
	"""


class RenderFailureError(LabelSheetError):
	"""
	Barcode image could not be rendered for a code.
	"""


class SourceReadError(LabelSheetError):
	"""
	Import source could not be read.
	"""
