# tests/test_phrase_store.py
from smart_autocomplete.core.phrase_store import PhraseStore, extract_trigger


LOOP = "for(i=0;i<n;i++)"


def test_rejects_degenerate_phrases():
    ps = PhraseStore()
    assert not ps.add_phrase("for", "fo")
    assert not ps.add_phrase("for", "for")
    assert not ps.add_phrase("for", "for()")  # only 2 extra chars
    assert not ps.add_phrase("", "something")
    assert not ps.add_phrase("a|b", "a|b long text")
    assert ps.total_phrases() == 0


def test_accepts_and_merges_identical():
    ps = PhraseStore()
    assert ps.add_phrase("for", LOOP)
    assert ps.add_phrase("for", LOOP)
    phrases = ps.get_phrases("for")
    assert len(phrases) == 1
    assert phrases[0].use_count == 2


def test_sorted_by_use_count_stable_on_ties():
    ps = PhraseStore()
    ps.add_phrase("for", "for each item")
    ps.add_phrase("for", "for key in d")
    ps.add_phrase("for", LOOP)
    ps.add_phrase("for", LOOP)
    snippets = [p.snippet for p in ps.get_phrases("for")]
    assert snippets == [LOOP, "for each item", "for key in d"]
    assert [p.snippet for p in ps.get_top_phrases("for", 1)] == [LOOP]
    assert ps.get_top_phrases("for", 0) == []


def test_returned_phrases_are_copies():
    ps = PhraseStore()
    ps.add_phrase("for", LOOP)
    ps.get_phrases("for")[0].use_count = 99
    assert ps.get_phrases("for")[0].use_count == 1


def test_unknown_trigger():
    ps = PhraseStore()
    assert ps.get_phrases("nothing") == []
    assert not ps.has_phrase("nothing", "nothing at all")


def test_save_and_load_roundtrip(tmp_path):
    path = tmp_path / "phrases.txt"
    ps = PhraseStore(path)
    ps.add_phrase("for", LOOP)
    ps.add_phrase("for", LOOP)
    ps.add_phrase("if", "if (a || b) {")
    assert path.read_text(encoding="utf-8") == f"for|{LOOP}|2\nif|if (a || b) {{|1\n"

    again = PhraseStore(path)
    assert again.total_phrases() == 2
    assert again.get_phrases("for")[0].use_count == 2
    assert again.has_phrase("if", "if (a || b) {")


def test_load_tolerates_bad_lines(tmp_path):
    path = tmp_path / "phrases.txt"
    path.write_text(
        "\n".join(
            [
                "for|for each item|3",
                "garbage",
                "for|missing count",
                "for|for each item x|abc",
                "for|fo|1",
                "for|for each item|5",
                "while|while (true) {}|0",
                "def|def main():|2",
            ]
        ),
        encoding="utf-8",
    )
    ps = PhraseStore(path)
    assert ps.total_phrases() == 2
    assert ps.get_phrases("for")[0].use_count == 3
    assert ps.triggers() == ["def", "for"]


def test_missing_file_is_empty(tmp_path):
    ps = PhraseStore(tmp_path / "absent.txt")
    assert ps.total_phrases() == 0


def test_extract_trigger():
    assert extract_trigger("  for(i=0;i<n;i++)  ") == "for"
    assert extract_trigger("#include <stdio.h>") == "#include"
    assert extract_trigger("std::vector<int> v;") == "std::vector"
    assert extract_trigger("(x)") == ""


def test_learn_line():
    ps = PhraseStore()
    phrase = ps.learn_line("   for(i=0;i<n;i++)   ")
    assert phrase is not None
    assert (phrase.trigger, phrase.snippet, phrase.use_count) == ("for", LOOP, 1)
    assert ps.learn_line("") is None
    assert ps.learn_line("word") is None


def test_rejects_line_breaks():
    ps = PhraseStore()
    assert not ps.add_phrase("for", "for x\ry in z")
    assert not ps.add_phrase("for", "for x\ny in z")
    assert not ps.add_phrase("f\r", "f\r and more")
    assert ps.total_phrases() == 0


def test_saved_phrases_survive_reload(tmp_path):
    path = tmp_path / "phrases.txt"
    ps = PhraseStore(path)
    ps.add_phrase("for", "for x\ry in z")
    ps.add_phrase("for", "for x in y | z")
    again = PhraseStore(path)
    assert again.total_phrases() == ps.total_phrases() == 1
    assert again.has_phrase("for", "for x in y | z")
    assert again.learn_line("for a\rb in c") is None
