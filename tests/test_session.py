import dataclasses
import pathlib

import pytest

import gtin_label_sheets.errors
import gtin_label_sheets.gtin
import gtin_label_sheets.session


RETAIL = gtin_label_sheets.gtin.CodeKind.RETAIL
LOGISTICS = gtin_label_sheets.gtin.CodeKind.LOGISTICS


#============================================
def make_session() -> gtin_label_sheets.session.LabelSession:
	session = gtin_label_sheets.session.LabelSession(RETAIL)
	session.add_item("Martelo", "789 1234 567895")
	session.add_item("Alicate", "4006381333931")
	session.add_item("Serrote", "5901234123457")
	return session


#============================================
def test_add_item_validates() -> None:
	"""
	Typed codes are cleaned, and invalid input leaves the list unchanged.
	"""
	session = make_session()
	assert [item.code for item in session.items] == [
		"7891234567895",
		"4006381333931",
		"5901234123457",
	]
	with pytest.raises(gtin_label_sheets.errors.InvalidChecksumError):
		session.add_item("Errado", "7891234567894")
	with pytest.raises(gtin_label_sheets.errors.EmptyDescriptionError):
		session.add_item("  ", "7891234567895")
	# codes of the other kind are rejected
	with pytest.raises(gtin_label_sheets.errors.InvalidChecksumError):
		session.add_item("Caixa", "17891234567892")
	assert len(session.items) == 3


#============================================
def test_add_items_rejects_other_kind() -> None:
	"""
	A retail session refuses logistics items and keeps its list unchanged.
	"""
	session = make_session()
	retail = gtin_label_sheets.gtin.make_item("Trena", "7891234567895", RETAIL)
	logistics = gtin_label_sheets.gtin.make_item("Caixa", "17891234567892", LOGISTICS)
	with pytest.raises(gtin_label_sheets.errors.InvalidChecksumError):
		session.add_items([retail, logistics])
	assert len(session.items) == 3
	session.add_items([retail])
	assert session.items[-1] is retail


#============================================
def test_import_text_appends() -> None:
	"""
	Bulk imports append after the existing items.
	"""
	session = make_session()
	result = session.import_text("Trena,7891234567895\nNada,000\n")
	assert result.rejected_count == 1
	assert [item.description for item in session.items][-1] == "Trena"
	rows_result = session.import_rows([["Descricao", "Codigo"], ["Nivel", "4006381333931"]])
	assert len(rows_result.accepted) == 1
	assert len(session.items) == 5


#============================================
def test_move_remove_clear() -> None:
	"""
	List edits keep ids and order consistent.
	"""
	session = make_session()
	session.move_item(2, 0)
	assert [item.description for item in session.items] == ["Serrote", "Martelo", "Alicate"]
	session.remove_item(session.items[1].item_id)
	assert [item.description for item in session.items] == ["Serrote", "Alicate"]
	session.remove_item("missing")
	assert len(session.items) == 2
	session.clear()
	assert session.items == ()


#============================================
def test_search() -> None:
	"""
	Search matches descriptions case-insensitively and code substrings.
	"""
	session = make_session()
	assert [item.description for item in session.search("mart")] == ["Martelo"]
	assert [item.description for item in session.search("4006")] == ["Alicate"]
	assert len(session.search("")) == 3


#============================================
def test_preset_and_manual_layout() -> None:
	"""
	Presets name the layout; manual edits drop the name.
	"""
	session = make_session()
	layout = session.apply_preset("A4260")
	assert layout.preset_name == "Pimaco A4260"
	assert session.export_filename() == "etiquetas-pimaco-a4260.pdf"

	layout = session.toggle_outlines()
	assert layout.show_outlines is True
	assert layout.preset_name == "Pimaco A4260"

	layout = session.set_layout(columns=4)
	assert layout.columns == 4
	assert layout.preset_name is None
	assert layout.show_outlines is True
	assert session.export_filename() == "etiquetas-GTIN-13.pdf"


#============================================
def test_layout_is_a_snapshot() -> None:
	"""
	Layouts are frozen and replaced on every change.
	"""
	session = make_session()
	layout = session.layout
	with pytest.raises(dataclasses.FrozenInstanceError):
		layout.columns = 9
	session.set_layout(columns=3)
	assert layout.columns == 2
	assert session.layout.columns == 3


#============================================
def test_placements_and_preview() -> None:
	"""
	The session lays out its items on the current grid.
	"""
	session = make_session()
	session.set_layout(columns=2, rows=1)
	placements = session.placements()
	assert [(p.page, p.column) for p in placements] == [(0, 0), (0, 1), (1, 0)]
	preview = session.preview()
	assert len(preview) == 2
	assert preview[0].item.description == "Martelo"


#============================================
def test_generate(tmp_path: pathlib.Path, fake_renderer) -> None:
	"""
	Generation writes the PDF under the export filename.
	"""
	session = gtin_label_sheets.session.LabelSession(LOGISTICS)
	session.add_item("Caixa Master", "17891234567892")
	result = session.generate(tmp_path, renderer=fake_renderer)
	assert result.total_labels == 1
	assert result.pages == 1
	assert (tmp_path / "etiquetas-GTIN-14.pdf").exists()
