"""
Geometry of a single label: title block and barcode box inside a cell.

All values are millimeters measured from the top-left page corner.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.utils
import reportlab.pdfbase.pdfmetrics

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.config


Placement = gls.config.Placement

SAFE_MARGIN = gls.config.SAFE_MARGIN
BARCODE_HEIGHT_RATIO = gls.config.BARCODE_HEIGHT_RATIO
BARCODE_MAX_HEIGHT = gls.config.BARCODE_MAX_HEIGHT
BARCODE_BOTTOM_OFFSET = gls.config.BARCODE_BOTTOM_OFFSET
TITLE_TOP_OFFSET = gls.config.TITLE_TOP_OFFSET
TITLE_BARCODE_SPACING = gls.config.TITLE_BARCODE_SPACING
TITLE_MIN_BOX_HEIGHT = gls.config.TITLE_MIN_BOX_HEIGHT
DEFAULT_FONT_BOLD = gls.config.DEFAULT_FONT_BOLD
TITLE_MAX_SIZE = gls.config.TITLE_MAX_SIZE
TITLE_MIN_SIZE = gls.config.TITLE_MIN_SIZE
TITLE_SIZE_STEP = gls.config.TITLE_SIZE_STEP
LINE_HEIGHT_FACTOR = gls.config.LINE_HEIGHT_FACTOR
BASELINE_SHIFT = gls.config.BASELINE_SHIFT


@dataclasses.dataclass(frozen=True)
class TitleFit:
	font_size: float
	lines: list[str]
	line_height: float
	fits: bool

	@property
	def block_height(self) -> float:
		return len(self.lines) * self.line_height


@dataclasses.dataclass(frozen=True)
class LabelGeometry:
	cell: tuple[float, float, float, float]
	barcode_box: tuple[float, float, float, float]
	title_box: tuple[float, float, float, float] | None
	title: TitleFit | None
	baselines: list[float]

	@property
	def center_x(self) -> float:
		return self.cell[0] + self.cell[2] / 2.0


#============================================
def line_height_for(font_size: float) -> float:
	"""
	Line height in mm for a font size in points.

	Args:
		font_size: Font size in points.

	Returns:
		Line height in mm.
	"""
	return gls.config.points_to_mm(font_size) * LINE_HEIGHT_FACTOR


#============================================
def barcode_limits(cell_width: float, cell_height: float) -> tuple[float, float]:
	"""
	Maximum barcode size inside a cell.

	Args:
		cell_width: Cell width.
		cell_height: Cell height.

	Returns:
		Tuple of (max_width, max_height).
	"""
	max_width = cell_width - SAFE_MARGIN * 2.0
	max_height = min(cell_height * BARCODE_HEIGHT_RATIO, BARCODE_MAX_HEIGHT)
	return (max_width, max_height)


#============================================
def fit_barcode(
	image_width: float,
	image_height: float,
	max_width: float,
	max_height: float,
) -> tuple[float, float]:
	"""
	Scale an image to the widest size that keeps its aspect ratio.

	Args:
		image_width: Source width in any unit.
		image_height: Source height in the same unit.
		max_width: Width limit.
		max_height: Height limit.

	Returns:
		Tuple of (width, height) in the limit units.
	"""
	if image_width <= 0 or image_height <= 0:
		return (max_width, max_height)
	width = max_width
	height = image_height * width / image_width
	if height > max_height:
		height = max_height
		width = image_width * height / image_height
	return (width, height)


#============================================
def barcode_box_for(
	placement: Placement,
	width: float,
	height: float,
) -> tuple[float, float, float, float]:
	"""
	Center a barcode horizontally and anchor it near the cell bottom.

	Args:
		placement: Cell placement.
		width: Barcode width.
		height: Barcode height.

	Returns:
		Box (x, y, width, height).
	"""
	center_x = placement.x + placement.width / 2.0
	x = center_x - width / 2.0
	y = placement.y + placement.height - height - BARCODE_BOTTOM_OFFSET
	return (x, y, width, height)


#============================================
def placeholder_box(placement: Placement) -> tuple[float, float, float, float]:
	"""
	Barcode box reserved when no image is available.

	Args:
		placement: Cell placement.

	Returns:
		Box (x, y, width, height) using the full barcode limits.
	"""
	max_width, max_height = barcode_limits(placement.width, placement.height)
	return barcode_box_for(placement, max_width, max_height)


#============================================
def break_long_line(line: str, font_name: str, font_size: float, max_width: float) -> list[str]:
	"""
	Break a line between characters so each piece fits a width.

	Args:
		line: Text wider than max_width.
		font_name: ReportLab font name.
		font_size: Font size in points.
		max_width: Width limit in points.

	Returns:
		Pieces in order; a single glyph wider than the limit stays alone.
	"""
	pieces: list[str] = []
	current = ""
	for char in line:
		candidate = current + char
		if current and reportlab.pdfbase.pdfmetrics.stringWidth(candidate, font_name, font_size) > max_width:
			pieces.append(current)
			current = char
		else:
			current = candidate
	if current:
		pieces.append(current)
	return pieces


#============================================
def wrap_title(text: str, font_name: str, font_size: float, max_width: float) -> list[str]:
	"""
	Wrap text on spaces, breaking words that are wider than the box.

	Args:
		text: Title text.
		font_name: ReportLab font name.
		font_size: Font size in points.
		max_width: Width limit in points.

	Returns:
		Wrapped lines.
	"""
	lines: list[str] = []
	for line in reportlab.lib.utils.simpleSplit(text, font_name, font_size, max_width):
		if reportlab.pdfbase.pdfmetrics.stringWidth(line, font_name, font_size) > max_width:
			lines.extend(break_long_line(line, font_name, font_size, max_width))
		else:
			lines.append(line)
	return lines


#============================================
def lines_fit(
	lines: list[str],
	font_name: str,
	font_size: float,
	max_width: float,
	max_height: float,
) -> bool:
	"""
	Check wrapped lines against a box.

	Args:
		lines: Wrapped lines.
		font_name: ReportLab font name.
		font_size: Font size in points.
		max_width: Width limit in points.
		max_height: Height limit in mm.

	Returns:
		True when the block is no taller and no line wider than the box.
	"""
	if len(lines) * line_height_for(font_size) > max_height:
		return False
	for line in lines:
		if reportlab.pdfbase.pdfmetrics.stringWidth(line, font_name, font_size) > max_width:
			return False
	return True


#============================================
def fit_title(
	text: str,
	max_width: float,
	max_height: float,
	font_name: str = DEFAULT_FONT_BOLD,
) -> TitleFit:
	"""
	Find the largest font size whose wrapped text fits a box.

	The size steps down from TITLE_MAX_SIZE. When even TITLE_MIN_SIZE
	does not fit, the full text is kept at that size and overflows.

	Args:
		text: Title text.
		max_width: Box width in mm.
		max_height: Box height in mm.
		font_name: ReportLab font name.

	Returns:
		TitleFit.
	"""
	width_points = gls.config.mm_to_points(max_width)
	font_size = TITLE_MAX_SIZE
	while font_size >= TITLE_MIN_SIZE:
		lines = wrap_title(text, font_name, font_size, width_points)
		if lines_fit(lines, font_name, font_size, width_points, max_height):
			return TitleFit(
				font_size=font_size,
				lines=lines,
				line_height=line_height_for(font_size),
				fits=True,
			)
		font_size -= TITLE_SIZE_STEP
	lines = wrap_title(text, font_name, TITLE_MIN_SIZE, width_points)
	return TitleFit(
		font_size=TITLE_MIN_SIZE,
		lines=lines,
		line_height=line_height_for(TITLE_MIN_SIZE),
		fits=False,
	)


#============================================
def compose_label(
	placement: Placement,
	description: str,
	image_size: tuple[float, float] | None,
	font_name: str = DEFAULT_FONT_BOLD,
) -> LabelGeometry:
	"""
	Compute the title and barcode areas of one label.

	Args:
		placement: Cell placement.
		description: Title text.
		image_size: Barcode image (width, height), or None when the image
			could not be rendered.
		font_name: ReportLab font name for the title.

	Returns:
		LabelGeometry.
	"""
	cell = (placement.x, placement.y, placement.width, placement.height)
	if image_size is None:
		barcode_box = placeholder_box(placement)
	else:
		max_width, max_height = barcode_limits(placement.width, placement.height)
		width, height = fit_barcode(image_size[0], image_size[1], max_width, max_height)
		barcode_box = barcode_box_for(placement, width, height)

	top = placement.y + TITLE_TOP_OFFSET
	bottom = barcode_box[1] - TITLE_BARCODE_SPACING
	available = bottom - top
	if available <= TITLE_MIN_BOX_HEIGHT:
		return LabelGeometry(cell=cell, barcode_box=barcode_box, title_box=None, title=None, baselines=[])

	text_width = placement.width - SAFE_MARGIN * 2.0
	title_box = (placement.x + SAFE_MARGIN, top, text_width, available)
	title = fit_title(description, text_width, available, font_name)
	first = top + (available - title.block_height) / 2.0 + title.line_height * (1.0 - BASELINE_SHIFT)
	baselines = [first + index * title.line_height for index in range(len(title.lines))]
	return LabelGeometry(
		cell=cell,
		barcode_box=barcode_box,
		title_box=title_box,
		title=title,
		baselines=baselines,
	)
