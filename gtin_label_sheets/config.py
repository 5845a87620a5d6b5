"""
Shared configuration and constants.
"""

import dataclasses


POINTS_PER_MM = 72.0 / 25.4
PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0

DEFAULT_COLUMNS = 2
DEFAULT_ROWS = 5
PRESET_CORNER_RADIUS = 3.0
PRESET_NAME_PREFIX = "Pimaco"

SAFE_MARGIN = 2.0
BARCODE_HEIGHT_RATIO = 0.45
BARCODE_MAX_HEIGHT = 20.0
BARCODE_BOTTOM_OFFSET = 3.0
TITLE_TOP_OFFSET = 3.0
TITLE_BARCODE_SPACING = 1.0
TITLE_MIN_BOX_HEIGHT = 3.0

DEFAULT_FONT_REGULAR = "Helvetica"
DEFAULT_FONT_BOLD = "Helvetica-Bold"
TITLE_MAX_SIZE = 16.0
TITLE_MIN_SIZE = 5.0
TITLE_SIZE_STEP = 0.5
LINE_HEIGHT_FACTOR = 1.15
BASELINE_SHIFT = 0.25
PLACEHOLDER_TEXT_SIZE = 6.0
OUTLINE_LINE_WIDTH = 0.1
OUTLINE_GRAY = 150.0 / 255.0

EMPTY_DOCUMENT_TEXT = "Nenhum item para exibir."
EXPORT_FILENAME_PREFIX = "etiquetas"
TEMPLATE_SHEET_NAME = "Modelo"
TEMPLATE_HEADERS = ("Descricao", "Codigo")
REJECTION_LOG_NAME = "rejected_rows.log"


@dataclasses.dataclass(frozen=True)
class LayoutSpec:
	columns: int = DEFAULT_COLUMNS
	rows: int = DEFAULT_ROWS
	cell_width: float | None = None
	cell_height: float | None = None
	margin_top: float | None = None
	margin_left: float | None = None
	gap_x: float | None = None
	gap_y: float | None = None
	corner_radius: float | None = None
	preset_name: str | None = None
	show_outlines: bool = False


@dataclasses.dataclass(frozen=True)
class ResolvedCell:
	width: float
	height: float
	margin_top: float
	margin_left: float
	gap_x: float
	gap_y: float


@dataclasses.dataclass(frozen=True)
class Placement:
	item_index: int
	page: int
	column: int
	row: int
	x: float
	y: float
	width: float
	height: float


@dataclasses.dataclass
class GenerationResult:
	total_labels: int
	pages: int
	labels_per_page: int
	render_failures: int
	output_path: str


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to points.

	Args:
		value: Millimeters value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_MM


#============================================
def points_to_mm(value: float) -> float:
	"""
	Convert points to millimeters.

	Args:
		value: Points value.

	Returns:
		Millimeters value.
	"""
	return value / POINTS_PER_MM
