"""
Barcode rasterization through python-barcode.
"""

# PIP3 modules
import barcode
import barcode.errors
import barcode.writer
import PIL.Image

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.errors
import gtin_label_sheets.gtin


CodeKind = gls.gtin.CodeKind
RenderFailureError = gls.errors.RenderFailureError

# module_height is in mm, quiet_zone in modules
WRITER_OPTIONS = {
	"module_width": 0.33,
	"module_height": 15.0,
	"quiet_zone": 2.0,
	"font_size": 10,
	"text_distance": 4.0,
	"write_text": True,
	"dpi": 300,
}


#============================================
def render_barcode(code: str, kind: CodeKind) -> PIL.Image.Image:
	"""
	Render a code as a barcode image with digits under the bars.

	GTIN-13 codes use EAN-13 and GTIN-14 codes use ITF-14.

	Args:
		code: Validated digit string.
		kind: Code kind.

	Returns:
		PIL image.
	"""
	try:
		barcode_class = barcode.get_barcode_class(kind.symbology)
		symbol = barcode_class(code, writer=barcode.writer.ImageWriter())
		image = symbol.render(dict(WRITER_OPTIONS))
	except (barcode.errors.BarcodeError, ValueError, OSError) as error:
		raise RenderFailureError(f"Could not render {kind.value} barcode {code}: {error}") from error
	image.load()
	return image
