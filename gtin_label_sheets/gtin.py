"""
GTIN code kinds, check digit validation and label items.
"""

# Standard Library
import dataclasses
import enum
import uuid

# local repo modules
import gtin_label_sheets as gls
import gtin_label_sheets.errors


InvalidChecksumError = gls.errors.InvalidChecksumError
EmptyDescriptionError = gls.errors.EmptyDescriptionError

ASCII_DIGITS = "0123456789"


class CodeKind(enum.Enum):
	RETAIL = "GTIN-13"
	LOGISTICS = "GTIN-14"

	@property
	def length(self) -> int:
		if self is CodeKind.RETAIL:
			return 13
		return 14

	@property
	def symbology(self) -> str:
		if self is CodeKind.RETAIL:
			return "ean13"
		return "itf"

	@property
	def example_code(self) -> str:
		if self is CodeKind.RETAIL:
			return "7891234567895"
		return "17891234567892"

	@property
	def example_description(self) -> str:
		if self is CodeKind.RETAIL:
			return "Produto Exemplo"
		return "Caixa Master Exemplo"


@dataclasses.dataclass(frozen=True)
class LabelItem:
	item_id: str
	description: str
	code: str
	kind: CodeKind

	def __post_init__(self) -> None:
		if not isinstance(self.description, str) or not self.description.strip():
			raise EmptyDescriptionError("A descrição é obrigatória.")
		if not is_valid(self.code, self.kind):
			raise InvalidChecksumError(f"Código {self.kind.value} inválido: {self.code}")


#============================================
def parse_kind(value: str) -> CodeKind:
	"""
	Parse a code kind from user text.

	Args:
		value: "retail", "logistics", "GTIN-13", "GTIN-14", "13" or "14".

	Returns:
		CodeKind.
	"""
	normalized = value.strip().upper().replace("_", "-")
	if normalized in ("RETAIL", "GTIN-13", "GTIN13", "EAN13", "13"):
		return CodeKind.RETAIL
	if normalized in ("LOGISTICS", "GTIN-14", "GTIN14", "ITF14", "14"):
		return CodeKind.LOGISTICS
	raise ValueError(f"Unknown code kind: {value}")


#============================================
def strip_non_digits(text: str) -> str:
	"""
	Keep only ASCII digits.

	Args:
		text: Input text.

	Returns:
		Digit string, possibly empty.
	"""
	return "".join(char for char in text if char in ASCII_DIGITS)


#============================================
def compute_check_digit(payload: str, kind: CodeKind) -> int:
	"""
	Compute the mod-10 check digit for a payload.

	Weights alternate from the leftmost payload digit: 1, 3, ... for
	GTIN-13 and 3, 1, ... for GTIN-14. In both cases the digit next to the
	check digit carries weight 3.

	Args:
		payload: All digits except the check digit.
		kind: Code kind.

	Returns:
		Check digit 0-9.
	"""
	first_weight = 1 if kind is CodeKind.RETAIL else 3
	second_weight = 3 if first_weight == 1 else 1
	total = 0
	for index, char in enumerate(payload):
		weight = first_weight if index % 2 == 0 else second_weight
		total += int(char) * weight
	return (10 - (total % 10)) % 10


#============================================
def is_valid(code: str, kind: CodeKind) -> bool:
	"""
	Check digit count and check digit of a code.

	Never raises; malformed input is simply invalid.

	Args:
		code: Candidate code.
		kind: Code kind.

	Returns:
		True when the code is valid for the kind.
	"""
	if not isinstance(code, str) or len(code) != kind.length:
		return False
	if any(char not in ASCII_DIGITS for char in code):
		return False
	payload = code[:-1]
	declared = int(code[-1])
	return compute_check_digit(payload, kind) == declared


#============================================
def make_item(description: str, code: str, kind: CodeKind) -> LabelItem:
	"""
	Build a validated label item.

	Args:
		description: Human readable title.
		code: Digit string.
		kind: Code kind.

	Returns:
		LabelItem with a fresh id.
	"""
	title = (description or "").strip()
	return LabelItem(
		item_id=uuid.uuid4().hex,
		description=title,
		code=code,
		kind=kind,
	)
