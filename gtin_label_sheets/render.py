"""
Draw paginated label sheets with reportlab.
"""

# Standard Library
import dataclasses
import json
import pathlib
import re
from collections.abc import Callable, Sequence

# PIP3 modules
import PIL.Image
import reportlab.lib.pagesizes
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.barcodes
import gtin_label_sheets.compose
import gtin_label_sheets.config
import gtin_label_sheets.gtin
import gtin_label_sheets.layout
import gtin_label_sheets.paginate


LayoutSpec = gls.config.LayoutSpec
ResolvedCell = gls.config.ResolvedCell
Placement = gls.config.Placement
GenerationResult = gls.config.GenerationResult
LabelGeometry = gls.compose.LabelGeometry
LabelItem = gls.gtin.LabelItem
CodeKind = gls.gtin.CodeKind

BarcodeRenderer = Callable[[str, CodeKind], PIL.Image.Image]

PAGE_HEIGHT_MM = gls.config.PAGE_HEIGHT_MM
DEFAULT_FONT_REGULAR = gls.config.DEFAULT_FONT_REGULAR
DEFAULT_FONT_BOLD = gls.config.DEFAULT_FONT_BOLD
PLACEHOLDER_TEXT_SIZE = gls.config.PLACEHOLDER_TEXT_SIZE
OUTLINE_LINE_WIDTH = gls.config.OUTLINE_LINE_WIDTH
OUTLINE_GRAY = gls.config.OUTLINE_GRAY
EMPTY_DOCUMENT_TEXT = gls.config.EMPTY_DOCUMENT_TEXT
EXPORT_FILENAME_PREFIX = gls.config.EXPORT_FILENAME_PREFIX

mm_to_points = gls.config.mm_to_points


#============================================
def pdf_box(box: tuple[float, float, float, float]) -> tuple[float, float, float, float]:
	"""
	Convert a top-left mm box into a bottom-left point box.

	Args:
		box: Box (x, y, width, height) in mm from the top-left corner.

	Returns:
		Box (x, y, width, height) in points from the bottom-left corner.
	"""
	x, y, width, height = box
	return (
		mm_to_points(x),
		mm_to_points(PAGE_HEIGHT_MM - y - height),
		mm_to_points(width),
		mm_to_points(height),
	)


#============================================
def pdf_y(y: float) -> float:
	return mm_to_points(PAGE_HEIGHT_MM - y)


#============================================
def export_filename(spec: LayoutSpec, kind: CodeKind | None) -> str:
	"""
	Build the export filename for a layout.

	Args:
		spec: Active layout.
		kind: Code kind of the items, None when unknown.

	Returns:
		File name such as "etiquetas-pimaco-a4260.pdf".
	"""
	if spec.preset_name:
		token = re.sub(r"\s+", "-", spec.preset_name.lower())
		return f"{EXPORT_FILENAME_PREFIX}-{token}.pdf"
	token = kind.value if kind is not None else "barcode"
	return f"{EXPORT_FILENAME_PREFIX}-{token}.pdf"


#============================================
def draw_cell_outline(
	pdf: reportlab.pdfgen.canvas.Canvas,
	placement: Placement,
	corner_radius: float | None,
) -> None:
	"""
	Draw the cut line of a cell.

	Args:
		pdf: ReportLab canvas.
		placement: Cell placement.
		corner_radius: Corner radius in mm, None or 0 for square corners.
	"""
	x, y, width, height = pdf_box((placement.x, placement.y, placement.width, placement.height))
	pdf.setStrokeGray(OUTLINE_GRAY)
	pdf.setLineWidth(mm_to_points(OUTLINE_LINE_WIDTH))
	if corner_radius:
		pdf.roundRect(x, y, width, height, mm_to_points(corner_radius), stroke=1, fill=0)
	else:
		pdf.rect(x, y, width, height, stroke=1, fill=0)


#============================================
def draw_title(
	pdf: reportlab.pdfgen.canvas.Canvas,
	geometry: LabelGeometry,
	font_name: str = DEFAULT_FONT_BOLD,
) -> None:
	"""
	Draw the wrapped title lines centered in the cell.

	Args:
		pdf: ReportLab canvas.
		geometry: Composed label geometry.
		font_name: ReportLab font name.
	"""
	if geometry.title is None:
		return
	pdf.setFillGray(0.0)
	pdf.setFont(font_name, geometry.title.font_size)
	center_x = mm_to_points(geometry.center_x)
	for line, baseline in zip(geometry.title.lines, geometry.baselines):
		pdf.drawCentredString(center_x, pdf_y(baseline), line)


#============================================
def draw_barcode_image(
	pdf: reportlab.pdfgen.canvas.Canvas,
	image_reader: reportlab.lib.utils.ImageReader,
	box: tuple[float, float, float, float],
) -> None:
	"""
	Draw a barcode image into its box.

	Args:
		pdf: ReportLab canvas.
		image_reader: ImageReader instance.
		box: Barcode box in mm.
	"""
	x, y, width, height = pdf_box(box)
	pdf.drawImage(
		image_reader,
		x,
		y,
		width=width,
		height=height,
		mask=None,
		preserveAspectRatio=False,
		anchor="sw",
	)


#============================================
def draw_placeholder(
	pdf: reportlab.pdfgen.canvas.Canvas,
	box: tuple[float, float, float, float],
	code: str,
) -> None:
	"""
	Draw a dashed box with the code where the barcode should be.

	Args:
		pdf: ReportLab canvas.
		box: Barcode box in mm.
		code: Code digits.
	"""
	x, y, width, height = pdf_box(box)
	pdf.saveState()
	pdf.setStrokeGray(0.0)
	pdf.setLineWidth(0.5)
	pdf.setDash(2, 2)
	pdf.rect(x, y, width, height, stroke=1, fill=0)
	pdf.line(x, y, x + width, y + height)
	pdf.line(x, y + height, x + width, y)
	pdf.restoreState()
	pdf.setFillGray(0.0)
	pdf.setFont(DEFAULT_FONT_REGULAR, PLACEHOLDER_TEXT_SIZE)
	pdf.drawCentredString(x + width / 2.0, y + height / 2.0 - PLACEHOLDER_TEXT_SIZE / 3.0, code)


#============================================
def draw_empty_document(pdf: reportlab.pdfgen.canvas.Canvas) -> None:
	pdf.setFont(DEFAULT_FONT_REGULAR, 16)
	pdf.drawCentredString(mm_to_points(105.0), pdf_y(148.0), EMPTY_DOCUMENT_TEXT)


#============================================
def draw_calibration_page(
	pdf: reportlab.pdfgen.canvas.Canvas,
	spec: LayoutSpec,
	resolved: ResolvedCell,
) -> None:
	"""
	Draw every slot outline with its number and a 10 mm ruler.

	Args:
		pdf: ReportLab canvas.
		spec: Layout spec.
		resolved: Resolved cell geometry.
	"""
	pdf.setLineWidth(0.3)
	pdf.setStrokeColorRGB(0.6, 0.6, 0.6)
	pdf.setFillGray(0.4)
	pdf.setFont(DEFAULT_FONT_REGULAR, 8)
	for slot in range(spec.columns * spec.rows):
		column = slot % spec.columns
		row = slot // spec.columns
		cell_x, cell_y = gls.paginate.slot_origin(resolved, column, row)
		x, y, width, height = pdf_box((cell_x, cell_y, resolved.width, resolved.height))
		pdf.rect(x, y, width, height, stroke=1, fill=0)
		pdf.drawCentredString(x + width / 2.0, y + height / 2.0 - 3.0, str(slot + 1))

	ruler_x = mm_to_points(10.0)
	ruler_y = pdf_y(PAGE_HEIGHT_MM - 5.0)
	pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
	pdf.setLineWidth(0.6)
	pdf.line(ruler_x, ruler_y, ruler_x + mm_to_points(10.0), ruler_y)
	pdf.setFillGray(0.0)
	pdf.drawString(ruler_x, ruler_y + 4.0, "10 mm")


#============================================
def rasterize(
	item: LabelItem,
	renderer: BarcodeRenderer,
	image_cache: dict[tuple[str, CodeKind], reportlab.lib.utils.ImageReader | None],
) -> reportlab.lib.utils.ImageReader | None:
	"""
	Render an item's barcode once and cache it, failures included.

	Args:
		item: Label item.
		renderer: Barcode renderer.
		image_cache: Cache keyed by (code, kind).

	Returns:
		ImageReader, or None when rendering failed.
	"""
	key = (item.code, item.kind)
	if key in image_cache:
		return image_cache[key]
	# any renderer error is confined to this item's cell
	try:
		image = renderer(item.code, item.kind)
		image_reader = reportlab.lib.utils.ImageReader(image)
	except Exception as error:
		print(f"Barcode render failed for {item.code}: {error}")
		image_cache[key] = None
		return None
	image_cache[key] = image_reader
	return image_reader


#============================================
def render_labels_to_pdf(
	items: Sequence[LabelItem],
	spec: LayoutSpec,
	output_path: pathlib.Path,
	renderer: BarcodeRenderer = gls.barcodes.render_barcode,
	calibration: bool = False,
) -> GenerationResult:
	"""
	Render labels onto A4 sheets.

	A barcode that fails to render leaves a placeholder in its cell;
	the remaining labels are unaffected.

	Args:
		items: Ordered label items.
		spec: Layout spec.
		output_path: Output PDF path.
		renderer: Barcode renderer.
		calibration: Add a calibration page first.

	Returns:
		GenerationResult.
	"""
	resolved = gls.layout.resolve_layout(spec)
	placements = gls.paginate.place_items(items, resolved, spec.columns, spec.rows)
	labels_per_page = spec.columns * spec.rows

	pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=reportlab.lib.pagesizes.A4)
	pages = 0
	if calibration:
		draw_calibration_page(pdf, spec, resolved)
		pdf.showPage()
		pages += 1

	if not items:
		draw_empty_document(pdf)
		pdf.showPage()
		pdf.save()
		return GenerationResult(
			total_labels=0,
			pages=pages + 1,
			labels_per_page=labels_per_page,
			render_failures=0,
			output_path=str(output_path),
		)

	image_cache: dict[tuple[str, CodeKind], reportlab.lib.utils.ImageReader | None] = {}
	failures = 0
	current_page = 0
	for placement in placements:
		item = items[placement.item_index]
		if placement.page != current_page:
			pdf.showPage()
			current_page = placement.page
		if spec.show_outlines:
			draw_cell_outline(pdf, placement, spec.corner_radius)
		image_reader = rasterize(item, renderer, image_cache)
		image_size = None
		if image_reader is not None:
			image_size = image_reader.getSize()
		geometry = gls.compose.compose_label(placement, item.description, image_size)
		if image_reader is None:
			failures += 1
			draw_placeholder(pdf, geometry.barcode_box, item.code)
		else:
			draw_barcode_image(pdf, image_reader, geometry.barcode_box)
		draw_title(pdf, geometry)
	pdf.showPage()
	pdf.save()

	pages += placements[-1].page + 1
	if failures > 0:
		print(f"Barcode render failures: {failures} labels")
	return GenerationResult(
		total_labels=len(items),
		pages=pages,
		labels_per_page=labels_per_page,
		render_failures=failures,
		output_path=str(output_path),
	)


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	inputs: list[str],
	items: Sequence[LabelItem],
	spec: LayoutSpec,
	result: GenerationResult,
	rejected_count: int = 0,
) -> None:
	"""
	Write a manifest JSON file.

	Args:
		manifest_path: Output path.
		inputs: Input sources.
		items: Rendered items.
		spec: Layout spec.
		result: Generation result.
		rejected_count: Rows rejected during import.
	"""
	resolved = gls.layout.resolve_layout(spec)
	placements = gls.paginate.place_items(items, resolved, spec.columns, spec.rows)
	labels = []
	for placement in placements:
		item = items[placement.item_index]
		entry = dataclasses.asdict(placement)
		entry["description"] = item.description
		entry["code"] = item.code
		entry["kind"] = item.kind.value
		labels.append(entry)
	data = {
		"inputs": inputs,
		"output": result.output_path,
		"total_labels": result.total_labels,
		"rejected_rows": rejected_count,
		"pages": result.pages,
		"labels_per_page": result.labels_per_page,
		"render_failures": result.render_failures,
		"layout": dataclasses.asdict(spec),
		"resolved": dataclasses.asdict(resolved),
		"labels": labels,
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True, ensure_ascii=False)
