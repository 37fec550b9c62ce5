from backend.DB.index import WordIndex


def test_words_are_bucketed_by_literal_first_char():
    idx = WordIndex(["apple", "Apple", "élan", "avocado"])
    assert list(idx.bucket("a")) == ["apple", "avocado"]
    assert list(idx.bucket("A")) == ["Apple"]
    assert list(idx.bucket("é")) == ["élan"]
    assert list(idx.bucket("e")) == []
    assert len(idx) == 4


def test_duplicates_and_empty_words_are_ignored():
    idx = WordIndex()
    assert idx.insert("word") is True
    assert idx.insert("word") is False
    assert idx.insert("") is False
    assert idx.bulk_insert(["word", "world", "world"]) == 1
    assert list(idx.bucket("w")) == ["word", "world"]


def test_remove():
    idx = WordIndex(["kiwi", "kale"])
    assert idx.remove("kiwi") is True
    assert idx.remove("kiwi") is False
    assert list(idx.bucket("k")) == ["kale"]
    idx.remove("kale")
    assert dict(idx.all_buckets()) == {}
    assert len(idx) == 0 and "kale" not in idx


def test_freeze_is_a_stable_snapshot():
    idx = WordIndex(["alpha"])
    snap = idx.freeze()
    idx.insert("alphabet")
    idx.insert("beta")

    assert list(snap.bucket("a")) == ["alpha"]
    assert list(snap.bucket("b")) == []
    assert "alphabet" not in snap and "alpha" in snap
    assert len(snap) == 1
    assert sorted(k for k, _ in idx.freeze().all_buckets()) == ["a", "b"]
