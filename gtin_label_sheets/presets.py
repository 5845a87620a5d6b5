"""
Catalog of Pimaco A4 label sheets and preset application.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.config


LayoutSpec = gls.config.LayoutSpec

PAGE_WIDTH_MM = gls.config.PAGE_WIDTH_MM
PAGE_HEIGHT_MM = gls.config.PAGE_HEIGHT_MM
PRESET_CORNER_RADIUS = gls.config.PRESET_CORNER_RADIUS
PRESET_NAME_PREFIX = gls.config.PRESET_NAME_PREFIX

CATEGORY_GENERAL = "Endereçamento & Uso Geral"
CATEGORY_SMALL = "Pequenos & Códigos"
CATEGORY_LARGE = "Caixas & Grandes"


@dataclasses.dataclass(frozen=True)
class LabelPreset:
	category: str
	model: str
	columns: int
	rows: int
	width: float
	height: float
	margin_left: float | None
	margin_top: float | None
	gap_x: float
	gap_y: float
	sheet_label: str

	@property
	def name(self) -> str:
		return f"{PRESET_NAME_PREFIX} {self.model}"


# gap_y is 0 on every Pimaco sheet, rows butt against each other
PIMACO_PRESETS = (
	LabelPreset(CATEGORY_GENERAL, "A4249", 3, 7, 70.0, 42.3, 0.0, 0.5, 0.0, 0.0, "21"),
	LabelPreset(CATEGORY_GENERAL, "A4260", 3, 7, 63.5, 38.1, 7.2, 15.1, 2.5, 0.0, "21"),
	LabelPreset(CATEGORY_GENERAL, "A4255", 3, 8, 70.0, 36.0, 0.0, 4.5, 0.0, 0.0, "24"),
	LabelPreset(CATEGORY_GENERAL, "A4355", 3, 9, 63.5, 31.0, 7.2, 9.0, 2.5, 0.0, "27"),
	LabelPreset(CATEGORY_GENERAL, "A4256", 3, 11, 63.5, 25.4, 7.2, 8.8, 2.5, 0.0, "33"),
	LabelPreset(CATEGORY_SMALL, "A4250", 4, 10, 52.5, 29.7, 0.0, 0.0, 0.0, 0.0, "40"),
	LabelPreset(CATEGORY_SMALL, "A4264", 4, 12, 48.5, 25.4, 8.0, 0.0, 0.0, 0.0, "48"),
	LabelPreset(CATEGORY_SMALL, "A4265", 4, 15, 48.5, 16.9, 8.0, 10.0, 0.0, 0.0, "60"),
	LabelPreset(CATEGORY_SMALL, "A4251", 5, 13, 38.1, 21.2, 9.75, 10.7, 0.0, 0.0, "65"),
	LabelPreset(CATEGORY_SMALL, "A4266", 5, 16, 38.0, 17.0, 10.0, 12.5, 0.0, 0.0, "80"),
	LabelPreset(CATEGORY_LARGE, "A4368", 2, 2, 105.0, 148.5, 0.0, 0.0, 0.0, 0.0, "4"),
	LabelPreset(CATEGORY_LARGE, "A4248", 2, 6, 105.0, 49.5, 0.0, 0.0, 0.0, 0.0, "12"),
)


#============================================
def list_categories() -> list[str]:
	"""
	List preset categories in catalog order.

	Returns:
		Category names without duplicates.
	"""
	categories: list[str] = []
	for preset in PIMACO_PRESETS:
		if preset.category not in categories:
			categories.append(preset.category)
	return categories


#============================================
def presets_in_category(category: str) -> list[LabelPreset]:
	return [preset for preset in PIMACO_PRESETS if preset.category == category]


#============================================
def find_preset(model: str) -> LabelPreset:
	"""
	Look up a preset by model, with or without the brand prefix.

	Args:
		model: Model such as "A4260" or "Pimaco A4260".

	Returns:
		LabelPreset.
	"""
	key = model.strip().upper()
	prefix = PRESET_NAME_PREFIX.upper() + " "
	if key.startswith(prefix):
		key = key[len(prefix):].strip()
	for preset in PIMACO_PRESETS:
		if preset.model.upper() == key:
			return preset
	raise KeyError(f"Unknown label preset: {model}")


#============================================
def centered_margin(page_size: float, count: int, size: float, gap: float) -> float:
	"""
	Compute the margin that centers a run of cells on the page.

	Args:
		page_size: Page dimension in mm.
		count: Number of cells along the axis.
		size: Cell size in mm.
		gap: Gap between cells in mm.

	Returns:
		Margin rounded to 1 decimal.
	"""
	margin = (page_size - count * size - (count - 1) * gap) / 2.0
	# half-up, so 7.25 becomes 7.3
	return math.floor(margin * 10.0 + 0.5) / 10.0


#============================================
def apply_preset(spec: LayoutSpec, preset: LabelPreset) -> LayoutSpec:
	"""
	Replace the grid geometry of a layout with a preset.

	Args:
		spec: Current layout; only show_outlines is carried over.
		preset: Preset to apply.

	Returns:
		New LayoutSpec.
	"""
	margin_left = preset.margin_left
	if margin_left is None:
		margin_left = centered_margin(PAGE_WIDTH_MM, preset.columns, preset.width, preset.gap_x)
	margin_top = preset.margin_top
	if margin_top is None:
		margin_top = centered_margin(PAGE_HEIGHT_MM, preset.rows, preset.height, preset.gap_y)
	return dataclasses.replace(
		spec,
		columns=preset.columns,
		rows=preset.rows,
		cell_width=preset.width,
		cell_height=preset.height,
		margin_top=margin_top,
		margin_left=margin_left,
		gap_x=preset.gap_x,
		gap_y=preset.gap_y,
		corner_radius=PRESET_CORNER_RADIUS,
		preset_name=preset.name,
	)
