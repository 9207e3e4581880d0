from doi_metadata.services.reference_extractor import NO_REFERENCES_NOTE, ReferenceExtractor


def test_record_without_reference_field_reports_note():
    result = ReferenceExtractor().extract({"DOI": "10.1/x"}, "10.1/x")

    assert result.references_count == 0
    assert result.references == []
    assert result.note == NO_REFERENCES_NOTE
    assert result.to_dict()["note"] == NO_REFERENCES_NOTE


def test_explicit_empty_reference_list_has_no_note():
    result = ReferenceExtractor().extract({"reference": []}, "10.1/x")

    assert result.references_count == 0
    assert result.note is None
    assert "note" not in result.to_dict()


def test_references_are_mapped_in_order():
    raw = {
        "reference": [
            {
                "key": "ref1",
                "DOI": "10.1000/a",
                "article-title": "First",
                "volume-title": "Ignored",
                "author": "Smith J.",
                "year": "2001",
                "journal-title": "Journal A",
                "volume": "1",
                "issue": "2",
                "first-page": "33",
            },
            {"key": "ref2", "volume-title": "Second Book"},
            {"key": "ref3", "unstructured": "Third, unstructured citation"},
        ]
    }

    result = ReferenceExtractor().extract(raw, "10.1/x")

    assert result.references_count == 3
    assert [ref.key for ref in result.references] == ["ref1", "ref2", "ref3"]
    first, second, third = result.references
    assert first.title == "First"
    assert first.doi == "10.1000/a"
    assert first.authors == "Smith J."
    assert first.journal == "Journal A"
    assert first.pages == "33"
    assert second.title == "Second Book"
    assert second.doi is None
    assert third.title is None
    assert third.raw == {"key": "ref3", "unstructured": "Third, unstructured citation"}
    assert result.note is None
