"""
CLI entry points for GTIN label sheet generation.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.config
import gtin_label_sheets.errors
import gtin_label_sheets.gtin
import gtin_label_sheets.ingest
import gtin_label_sheets.layout
import gtin_label_sheets.presets
import gtin_label_sheets.render
import gtin_label_sheets.spreadsheet


LayoutSpec = gls.config.LayoutSpec
CodeKind = gls.gtin.CodeKind
InvalidLayoutError = gls.errors.InvalidLayoutError
SourceReadError = gls.errors.SourceReadError

DEFAULT_COLUMNS = gls.config.DEFAULT_COLUMNS
DEFAULT_ROWS = gls.config.DEFAULT_ROWS


#============================================
def build_layout_spec(args: argparse.Namespace) -> LayoutSpec:
	"""
	Build the layout spec from CLI args.

	A preset replaces the grid geometry; explicit geometry flags are
	ignored when a preset is given.

	Args:
		args: Parsed argparse namespace.

	Returns:
		LayoutSpec.
	"""
	spec = LayoutSpec(
		columns=args.columns,
		rows=args.rows,
		cell_width=args.cell_width,
		cell_height=args.cell_height,
		margin_top=args.margin_top,
		margin_left=args.margin_left,
		gap_x=args.gap_x,
		gap_y=args.gap_y,
		corner_radius=args.corner_radius,
		preset_name=None,
		show_outlines=args.draw_outlines,
	)
	if args.preset:
		preset = gls.presets.find_preset(args.preset)
		spec = gls.presets.apply_preset(spec, preset)
	return spec


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Lay out GTIN barcode labels on A4 sheets.")
	parser.add_argument("inputs", nargs="*", help="Text, CSV or XLSX files with description/code pairs.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=None, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-t", "--template", dest="template_path", default=None, help="Write an XLSX import template and exit.")

	code_group = parser.add_argument_group("Codes")
	code_group.add_argument("-k", "--kind", dest="kind", default="retail", help="retail (GTIN-13) or logistics (GTIN-14).")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-p", "--preset", dest="preset", default=None, help="Pimaco sheet model, e.g. A4260.")
	layout_group.add_argument("-L", "--list-presets", dest="list_presets", action="store_true", help="List sheet presets and exit.")
	layout_group.add_argument("-c", "--columns", dest="columns", type=int, default=DEFAULT_COLUMNS, help="Grid columns.")
	layout_group.add_argument("-r", "--rows", dest="rows", type=int, default=DEFAULT_ROWS, help="Grid rows.")
	layout_group.add_argument("--cell-width", dest="cell_width", type=float, default=None, help="Cell width in mm.")
	layout_group.add_argument("--cell-height", dest="cell_height", type=float, default=None, help="Cell height in mm.")
	layout_group.add_argument("--margin-left", dest="margin_left", type=float, default=None, help="Left margin in mm.")
	layout_group.add_argument("--margin-top", dest="margin_top", type=float, default=None, help="Top margin in mm.")
	layout_group.add_argument("--gap-x", dest="gap_x", type=float, default=None, help="Horizontal gap in mm.")
	layout_group.add_argument("--gap-y", dest="gap_y", type=float, default=None, help="Vertical gap in mm.")
	layout_group.add_argument("--corner-radius", dest="corner_radius", type=float, default=None, help="Outline corner radius in mm.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-d", "--draw-outlines", dest="draw_outlines", action="store_true", help="Draw cut lines.")
	behavior_group.add_argument("-D", "--no-draw-outlines", dest="draw_outlines", action="store_false", help="Disable cut lines.")
	behavior_group.add_argument("-C", "--calibration", dest="calibration", action="store_true", help="Add a calibration page.")

	parser.set_defaults(
		draw_outlines=False,
		calibration=False,
		list_presets=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def print_presets() -> None:
	"""
	Print the preset catalog grouped by category.
	"""
	for category in gls.presets.list_categories():
		print(category)
		for preset in gls.presets.presets_in_category(category):
			print(
				f"  {preset.model}  {preset.columns}x{preset.rows}  "
				f"{preset.width:.1f}x{preset.height:.1f} mm  {preset.sheet_label} per sheet"
			)


#============================================
def import_sources(inputs: list[str], kind: CodeKind) -> gls.ingest.BulkResult:
	"""
	Import every input file into one result, keeping input order.

	Args:
		inputs: Input file paths.
		kind: Code kind.

	Returns:
		Combined BulkResult.
	"""
	combined = gls.ingest.BulkResult()
	for entry in inputs:
		path = pathlib.Path(entry).expanduser()
		result = gls.spreadsheet.load_source(path, kind)
		print(f"{path.name}: {len(result.accepted)} imported, {result.rejected_count} invalid")
		combined.accepted.extend(result.accepted)
		combined.rejected.extend(result.rejected)
	return combined


#============================================
def run_pipeline(args: argparse.Namespace) -> int:
	"""
	Run import, layout and rendering.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Process exit code.
	"""
	kind = gls.gtin.parse_kind(args.kind)
	if args.list_presets:
		print_presets()
		return 0
	if args.template_path:
		gls.spreadsheet.write_template(pathlib.Path(args.template_path), kind)
		return 0

	spec = build_layout_spec(args)
	output_path = pathlib.Path(args.output_path or gls.render.export_filename(spec, kind))

	print("GTIN label sheet pipeline")
	print(f"Code kind: {kind.value}")
	print(f"Output PDF: {output_path}")
	if spec.preset_name:
		print(f"Preset: {spec.preset_name}")
	print(f"Grid: {spec.columns}x{spec.rows}")
	print(f"Draw outlines: {spec.show_outlines}")
	print(f"Calibration: {args.calibration}")

	start_time = time.perf_counter()
	try:
		resolved = gls.layout.resolve_layout(spec)
		print(f"Cell: {resolved.width:.2f}x{resolved.height:.2f} mm")
		imported = import_sources(args.inputs, kind)
	except (InvalidLayoutError, SourceReadError) as error:
		print(f"Error: {error}")
		return 2
	import_end = time.perf_counter()

	items = imported.accepted
	print(f"Labels imported: {len(items)}")
	print(f"Rows rejected: {imported.rejected_count}")
	if not items and imported.rejected_count > 0:
		print("Nenhum código válido encontrado.")
	gls.ingest.write_rejection_log(imported.rejected, output_path)

	result = gls.render.render_labels_to_pdf(
		items,
		spec,
		output_path,
		calibration=args.calibration,
	)
	render_end = time.perf_counter()
	print(f"Pages written: {result.pages}")
	print(f"Labels per page: {result.labels_per_page}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	gls.render.write_manifest(
		pathlib.Path(manifest_path),
		list(args.inputs),
		items,
		spec,
		result,
		imported.rejected_count,
	)
	print(
		"Timing: import={:.2f}s render={:.2f}s".format(
			import_end - start_time,
			render_end - import_end,
		)
	)
	print(f"Manifest written: {manifest_path}")
	return 0


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		code = run_pipeline(args)
	except (KeyError, ValueError) as error:
		print(f"Error: {error}")
		code = 2
	sys.exit(code)
