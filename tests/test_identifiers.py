from doi_metadata.core.identifiers import is_valid_doi, normalize_doi, normalize_orcid


def test_normalize_doi_strips_prefixes_and_lowercases():
    assert normalize_doi("https://doi.org/10.1000/ABC") == "10.1000/abc"
    assert normalize_doi("DOI:10.1000/XYZ") == "10.1000/xyz"


def test_normalize_doi_handles_dx_prefix_and_spacing():
    assert normalize_doi("  HTTPS://DX.DOI.ORG/10.5555/ABC  ") == "10.5555/abc"


def test_normalize_doi_trims_whitespace_and_handles_none():
    assert normalize_doi("  https://doi.org/10.1000/12345  ") == "10.1000/12345"
    assert normalize_doi("") is None
    assert normalize_doi(None) is None


def test_is_valid_doi_requires_registrant_prefix_and_suffix():
    assert is_valid_doi("10.1038/nature14539")
    assert is_valid_doi("10.1/x")
    assert not is_valid_doi("nature14539")
    assert not is_valid_doi("10.1038/")
    assert not is_valid_doi(None)


def test_normalize_orcid_accepts_urls_and_bare_identifiers():
    assert normalize_orcid("http://orcid.org/0000-0002-1234-5678") == "0000-0002-1234-5678"
    assert normalize_orcid("https://orcid.org/0000-0001-2345-678x") == "0000-0001-2345-678X"
    assert normalize_orcid("0000-0003-0000-0001") == "0000-0003-0000-0001"


def test_normalize_orcid_rejects_garbage():
    assert normalize_orcid("not-an-orcid") is None
    assert normalize_orcid("") is None
    assert normalize_orcid(None) is None
