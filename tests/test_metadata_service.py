import pytest
import requests
import responses

import doi_metadata
from doi_metadata.api import MetadataClient
from doi_metadata.config import MetadataConfig
from doi_metadata.core.models import NameSource
from doi_metadata.exceptions import UpstreamError, ValidationError

WORK_URL = "https://api.crossref.org/works/10.1/x"
BIBTEX_URL = "https://api.crossref.org/works/10.1/x/transform/application/x-bibtex"
PERSON_URL = "https://pub.orcid.org/v3.0/0000-0002-1234-5678/person"


def _client(**overrides) -> MetadataClient:
    settings = {"max_attempts": 1, "user_agent": "doi-metadata-tests"}
    settings.update(overrides)
    return MetadataClient(MetadataConfig(**settings), session=requests.Session())


@responses.activate
def test_fetch_metadata_generates_bibtex_without_orcid(lecun_work):
    responses.add(responses.GET, WORK_URL, json={"message": lecun_work}, status=200)

    metadata = _client(enable_orcid_lookup=False, enable_direct_bibtex=False).fetch_metadata("10.1/x")

    assert metadata.bibtex_source == "generated"
    assert metadata.bibtex.startswith("@article{LeCun2015,\n")
    assert "  journal = {Nature},\n" in metadata.bibtex
    assert "  title = {{Deep Learning}},\n" in metadata.bibtex
    assert metadata.authors[0].full_name == "Y. LeCun"
    assert metadata.authors[0].name_source is NameSource.PRIMARY
    assert len(responses.calls) == 1
    assert responses.calls[0].request.headers["User-Agent"] == "doi-metadata-tests"


@responses.activate
def test_fetch_metadata_enhances_authors_and_falls_back_when_export_fails(lecun_work):
    responses.add(responses.GET, WORK_URL, json={"message": lecun_work}, status=200)
    responses.add(responses.GET, BIBTEX_URL, status=404)
    responses.add(
        responses.GET,
        PERSON_URL,
        json={"name": {"given-names": {"value": "Yann"}, "family-name": {"value": "LeCun"}}},
        status=200,
    )

    metadata = _client().fetch_metadata("https://doi.org/10.1/X")

    author = metadata.authors[0]
    assert author.full_name == "Yann LeCun"
    assert author.name_source is NameSource.IDENTITY_REGISTRY
    assert metadata.bibtex_source == "generated"
    assert "  author = {Yann LeCun},\n" in metadata.bibtex


@responses.activate
def test_fetch_metadata_prefers_sanitized_export(lecun_work):
    responses.add(responses.GET, WORK_URL, json={"message": lecun_work}, status=200)
    responses.add(
        responses.GET,
        BIBTEX_URL,
        body=" @article{LeCun_2015, title={Deep learning}, abstract={Long {text}}, year={2015}}",
        status=200,
    )
    responses.add(responses.GET, PERSON_URL, status=500)

    metadata = _client().fetch_metadata("10.1/x")

    assert metadata.bibtex_source == "direct"
    assert metadata.bibtex.startswith("@article{LeCun_2015,\n")
    assert "  title = {{Deep learning}},\n" in metadata.bibtex
    assert "abstract" not in metadata.bibtex
    assert len([call for call in responses.calls if call.request.url == PERSON_URL]) == 1
    assert metadata.authors[0].full_name == "Y. LeCun"
    assert metadata.authors[0].name_source is NameSource.PRIMARY


@responses.activate
def test_to_dict_shape(lecun_work):
    responses.add(responses.GET, WORK_URL, json={"message": lecun_work}, status=200)

    payload = _client(enable_orcid_lookup=False, enable_direct_bibtex=False).fetch_metadata("10.1/x").to_dict()

    assert payload["doi"] == "10.1/x"
    assert payload["title"] == "Deep Learning"
    assert payload["year"] == 2015
    assert payload["venue"] == {"full_name": "Nature", "abbreviated": "Nature", "issn": []}
    assert payload["volume"] is None
    assert payload["references_count"] == 0
    assert payload["authors"][0]["name_source"] == "primary"
    assert payload["authors"][0]["id"] == "http://orcid.org/0000-0002-1234-5678"


@responses.activate
def test_primary_lookup_failure_is_upstream_error():
    responses.add(responses.GET, WORK_URL, body="Resource not found.", status=404)

    with pytest.raises(UpstreamError) as excinfo:
        _client().fetch_metadata("10.1/x")

    assert excinfo.value.doi == "10.1/x"
    assert "Failed to fetch metadata for DOI 10.1/x" in str(excinfo.value)


@pytest.mark.parametrize("doi", [None, "", "   ", "not-a-doi"])
def test_invalid_doi_raises_before_any_request(doi):
    with responses.RequestsMock() as mocked:
        with pytest.raises(ValidationError):
            _client().fetch_metadata(doi)
        with pytest.raises(ValidationError):
            _client().fetch_references(doi)
        assert len(mocked.calls) == 0


@responses.activate
def test_fetch_references_distinguishes_missing_and_empty_lists():
    responses.add(responses.GET, WORK_URL, json={"message": {"DOI": "10.1/x"}}, status=200)
    responses.add(
        responses.GET,
        "https://api.crossref.org/works/10.1/y",
        json={"message": {"DOI": "10.1/y", "reference": []}},
        status=200,
    )
    client = _client()

    missing = client.fetch_references("10.1/x")
    empty = client.fetch_references("10.1/y")

    assert missing.note == "No references available for this DOI"
    assert empty.note is None
    assert empty.references_count == 0


@responses.activate
def test_fetch_references_upstream_failure():
    responses.add(responses.GET, WORK_URL, status=500)

    with pytest.raises(UpstreamError) as excinfo:
        _client().fetch_references("10.1/x")

    assert "Failed to fetch references for DOI 10.1/x" in str(excinfo.value)


@responses.activate
def test_unparseable_export_falls_back_to_generated_entry(lecun_work):
    responses.add(responses.GET, WORK_URL, json={"message": lecun_work}, status=200)
    responses.add(responses.GET, BIBTEX_URL, body="@@@ not an entry", status=200)

    metadata = _client(enable_orcid_lookup=False).fetch_metadata("10.1/x")

    assert metadata.bibtex_source == "generated"
    assert metadata.bibtex.startswith("@article{LeCun2015,\n")


@responses.activate
def test_fetch_references_reports_registry_doi():
    responses.add(
        responses.GET,
        WORK_URL,
        json={"message": {"DOI": "10.1/X", "reference": [{"key": "r1", "DOI": "10.2/y"}]}},
        status=200,
    )

    result = _client().fetch_references("https://doi.org/10.1/x")

    assert result.doi == "10.1/X"
    assert result.references_count == 1
    assert result.references[0].doi == "10.2/y"


def test_functional_helpers_use_default_client(monkeypatch):
    class _StubClient:
        def fetch_references(self, doi):
            from doi_metadata.core.models import ReferenceList

            return ReferenceList(doi=doi, references_count=0)

    monkeypatch.setattr(doi_metadata, "_default_client", _StubClient())

    assert doi_metadata.fetch_references("10.1/x") == {
        "doi": "10.1/x",
        "references_count": 0,
        "references": [],
    }
