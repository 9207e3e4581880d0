import json

import responses

from doi_metadata import cli

WORK_URL = "https://api.crossref.org/works/10.1/x"


@responses.activate
def test_metadata_command_prints_json(capsys, lecun_work):
    responses.add(responses.GET, WORK_URL, json={"message": lecun_work}, status=200)

    exit_code = cli.main(["metadata", "10.1/x", "--no-orcid", "--no-direct-bibtex"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["title"] == "Deep Learning"
    assert payload["bibtex"].startswith("@article{LeCun2015,")


@responses.activate
def test_metadata_command_bibtex_only(capsys, lecun_work):
    responses.add(responses.GET, WORK_URL, json={"message": lecun_work}, status=200)

    exit_code = cli.main(["metadata", "10.1/x", "--no-orcid", "--no-direct-bibtex", "--bibtex-only"])

    assert exit_code == 0
    assert capsys.readouterr().out.startswith("@article{LeCun2015,\n")


@responses.activate
def test_references_command_reports_missing_list(capsys):
    responses.add(responses.GET, WORK_URL, json={"message": {"DOI": "10.1/x"}}, status=200)

    exit_code = cli.main(["references", "10.1/x"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["references_count"] == 0
    assert payload["note"] == "No references available for this DOI"


def test_errors_exit_with_status_one(capsys):
    exit_code = cli.main(["references", "not-a-doi"])

    assert exit_code == 1
    assert "Malformed DOI" in capsys.readouterr().err
