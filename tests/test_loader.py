import pytest
import requests

from aussprache import loader
from aussprache.errors import LoadError
from aussprache.loader import detect_delimiter, join_location, parse_table, split_line

from .conftest import FakeResponse


def test_split_line_respects_quotes():
    assert split_line('"a,b",c', ",") == ["a,b", "c"]


def test_split_line_doubled_quote_is_literal():
    assert split_line('"say ""hi""",x', ",") == ['say "hi"', "x"]


def test_comma_beats_semicolon_noise():
    rows = parse_table("a,b,c\nd,e,f\nx;y")
    assert rows[0] == ["a", "b", "c"]
    assert rows[1] == ["d", "e", "f"]
    assert rows[2] == ["x;y"]


def test_semicolon_detected():
    assert detect_delimiter(["a;b;c", "d;e;f"]) == ";"


def test_tab_and_pipe_detected():
    assert parse_table("a\tb\nc\td") == [["a", "b"], ["c", "d"]]
    assert parse_table("a|b|c\nd|e|f") == [["a", "b", "c"], ["d", "e", "f"]]


def test_tie_falls_back_to_comma():
    assert detect_delimiter(["abc", "def"]) == ","
    assert detect_delimiter(["a,b;c"]) == ","
    assert parse_table("a,b;c") == [["a", "b;c"]]


def test_bom_crlf_and_blank_lines():
    raw = "\ufeffFruit;Animal\r\n\r\n  \r\napple;cat\r\n"
    assert parse_table(raw) == [["Fruit", "Animal"], ["apple", "cat"]]


def test_trailing_empty_cells_dropped_interior_kept():
    rows = parse_table("a,b,c\n 1 , ,3\n,,\npear,,\n")
    assert rows == [["a", "b", "c"], ["1", "", "3"], ["pear"]]


def test_empty_content_is_empty_result():
    assert parse_table("") == []
    assert parse_table("\ufeff\r\n  \n") == []


def test_join_location():
    assert join_location("root/", "ds1", "title_a.mp3") == "root/ds1/title_a.mp3"
    assert join_location("http://host/audio", "x.mp3") == "http://host/audio/x.mp3"
    assert join_location("", "x.csv") == "x.csv"


def test_load_table_local_file(tmp_path):
    p = tmp_path / "ds.csv"
    p.write_text("A|B\nx|y\n", encoding="utf-8")
    assert loader.load_table(str(p)) == [["A", "B"], ["x", "y"]]


def test_missing_file_raises_load_error(tmp_path):
    location = str(tmp_path / "nope.csv")
    with pytest.raises(LoadError) as exc:
        loader.fetch_text(location)
    assert exc.value.location == location
    assert exc.value.status is None


def test_http_status_raises_load_error(monkeypatch):
    monkeypatch.setattr(loader.requests, "get",
                        lambda url, timeout: FakeResponse(404, reason="Not Found"))
    with pytest.raises(LoadError) as exc:
        loader.fetch_text("http://example.org/ds.csv")
    assert exc.value.status == 404
    assert "http://example.org/ds.csv" in str(exc.value)
    assert "404" in str(exc.value)


def test_http_transport_error_raises_load_error(monkeypatch):
    def boom(url, timeout):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(loader.requests, "get", boom)
    with pytest.raises(LoadError) as exc:
        loader.fetch_text("https://example.org/ds.csv")
    assert exc.value.status is None


def test_http_success_decodes_utf8(monkeypatch):
    body = "Frucht;Tier\nÄpfel;Kätzchen\n".encode("utf-8")
    monkeypatch.setattr(loader.requests, "get", lambda url, timeout: FakeResponse(200, body))
    assert loader.load_table("http://example.org/ds.csv") == [["Frucht", "Tier"], ["Äpfel", "Kätzchen"]]


def test_local_latin1_file_falls_back(tmp_path):
    p = tmp_path / "excel.csv"
    p.write_bytes("Frucht;Tier\nÄpfel;Kätzchen\n".encode("cp1252"))
    assert loader.load_table(str(p)) == [["Frucht", "Tier"], ["Äpfel", "Kätzchen"]]


def test_http_latin1_body_falls_back(monkeypatch):
    body = "Frucht;Tier\nÄpfel;Kätzchen\n".encode("iso-8859-1")
    monkeypatch.setattr(loader.requests, "get", lambda url, timeout: FakeResponse(200, body))
    assert loader.load_table("http://example.org/ds.csv") == [["Frucht", "Tier"], ["Äpfel", "Kätzchen"]]


def test_decode_bytes_prefers_utf8():
    assert loader.decode_bytes("Kätzchen".encode("utf-8")) == "Kätzchen"
    assert loader.decode_bytes("Kätzchen".encode("iso-8859-1")) == "Kätzchen"
