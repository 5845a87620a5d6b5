"""
Session state: the ordered item list and the active layout.
"""

# Standard Library
import dataclasses
import pathlib
from collections.abc import Iterable, Sequence

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.barcodes
import gtin_label_sheets.config
import gtin_label_sheets.errors
import gtin_label_sheets.gtin
import gtin_label_sheets.ingest
import gtin_label_sheets.layout
import gtin_label_sheets.paginate
import gtin_label_sheets.presets
import gtin_label_sheets.render


CodeKind = gls.gtin.CodeKind
LabelItem = gls.gtin.LabelItem
LayoutSpec = gls.config.LayoutSpec
Placement = gls.config.Placement
GenerationResult = gls.config.GenerationResult
BulkResult = gls.ingest.BulkResult
PreviewCell = gls.paginate.PreviewCell
BarcodeRenderer = gls.render.BarcodeRenderer
InvalidChecksumError = gls.errors.InvalidChecksumError


class LabelSession:
	"""
	Owner of the item list and layout for one code kind.

	Every change replaces the item tuple or the layout; callers only
	ever see snapshots.
	"""

	def __init__(self, kind: CodeKind, layout: LayoutSpec | None = None) -> None:
		self._kind = kind
		self._items: tuple[LabelItem, ...] = ()
		self._layout = layout if layout is not None else LayoutSpec()

	@property
	def kind(self) -> CodeKind:
		return self._kind

	@property
	def items(self) -> tuple[LabelItem, ...]:
		return self._items

	@property
	def layout(self) -> LayoutSpec:
		return self._layout

	#============================================
	def add_item(self, description: str, code: str) -> LabelItem:
		"""
		Add one item typed by the user.

		Args:
			description: Title text.
			code: Code text; non-digits are ignored.

		Returns:
			The new item.
		"""
		item = gls.gtin.make_item(description, gls.gtin.strip_non_digits(code), self._kind)
		self._items = self._items + (item,)
		return item

	#============================================
	def add_items(self, items: Iterable[LabelItem]) -> None:
		"""
		Append already built items; nothing is added if any item is rejected.

		Args:
			items: Items of this session's code kind.
		"""
		incoming = tuple(items)
		for item in incoming:
			if item.kind is not self._kind:
				raise InvalidChecksumError(
					f"Código {item.code} é {item.kind.value}, esperado {self._kind.value}"
				)
		self._items = self._items + incoming

	#============================================
	def import_text(self, raw: str) -> BulkResult:
		"""
		Import pasted text and append the accepted items.

		Args:
			raw: Pasted text.

		Returns:
			BulkResult.
		"""
		result = gls.ingest.parse_text(raw, self._kind)
		self.add_items(result.accepted)
		return result

	#============================================
	def import_rows(self, rows: Iterable[Sequence[object]]) -> BulkResult:
		"""
		Import spreadsheet rows and append the accepted items.

		Args:
			rows: Rows with a header row first.

		Returns:
			BulkResult.
		"""
		result = gls.ingest.parse_rows(rows, self._kind)
		self.add_items(result.accepted)
		return result

	def remove_item(self, item_id: str) -> None:
		self._items = tuple(item for item in self._items if item.item_id != item_id)

	def clear(self) -> None:
		self._items = ()

	#============================================
	def move_item(self, from_index: int, to_index: int) -> None:
		"""
		Move an item to a new position in the list.

		Args:
			from_index: Current index.
			to_index: Target index.
		"""
		items = list(self._items)
		moved = items.pop(from_index)
		items.insert(to_index, moved)
		self._items = tuple(items)

	#============================================
	def search(self, term: str) -> list[LabelItem]:
		"""
		Filter items by description or code.

		Args:
			term: Search text, case-insensitive for descriptions.

		Returns:
			Matching items in list order.
		"""
		needle = term.lower()
		return [
			item for item in self._items
			if needle in item.description.lower() or term in item.code
		]

	def apply_preset(self, model: str) -> LayoutSpec:
		preset = gls.presets.find_preset(model)
		self._layout = gls.presets.apply_preset(self._layout, preset)
		return self.layout

	#============================================
	def set_layout(self, **fields: object) -> LayoutSpec:
		"""
		Replace layout fields. Editing geometry by hand drops the preset name.

		Args:
			fields: LayoutSpec field values.

		Returns:
			The new layout.
		"""
		if "preset_name" not in fields:
			fields["preset_name"] = None
		self._layout = dataclasses.replace(self._layout, **fields)
		return self.layout

	def toggle_outlines(self) -> LayoutSpec:
		self._layout = dataclasses.replace(self._layout, show_outlines=not self._layout.show_outlines)
		return self.layout

	def placements(self) -> list[Placement]:
		resolved = gls.layout.resolve_layout(self._layout)
		return gls.paginate.place_items(self._items, resolved, self._layout.columns, self._layout.rows)

	def preview(self) -> list[PreviewCell]:
		return gls.paginate.preview_cells(self._layout, self._items)

	def export_filename(self) -> str:
		return gls.render.export_filename(self._layout, self._kind)

	#============================================
	def generate(
		self,
		output_dir: pathlib.Path,
		calibration: bool = False,
		renderer: BarcodeRenderer = gls.barcodes.render_barcode,
	) -> GenerationResult:
		"""
		Render the current items into output_dir using the export filename.

		Args:
			output_dir: Directory for the PDF.
			calibration: Add a calibration page first.
			renderer: Barcode renderer.

		Returns:
			GenerationResult.
		"""
		output_path = output_dir / self.export_filename()
		return gls.render.render_labels_to_pdf(
			self._items,
			self._layout,
			output_path,
			renderer=renderer,
			calibration=calibration,
		)
