import io
from pathlib import Path
from types import SimpleNamespace

import pytest

from ocmulticluster.clusters import (
    Cluster,
    default_clusters_path,
    delete_cluster,
    list_clusters,
    load_clusters,
    prompt_clusters,
    reset_clusters_file,
    run_setup,
    save_clusters,
    setup_help,
)


def scripted(*answers):
    queue = list(answers)
    prompts = []

    def ask(prompt):
        prompts.append(prompt)
        if not queue:
            raise EOFError
        return queue.pop(0)

    ask.prompts = prompts
    return ask


def options(**kwargs):
    base = {"help": False, "list": False, "reset": False, "append": False, "delete_cluster": None}
    base.update(kwargs)
    return SimpleNamespace(**base)


@pytest.fixture
def path(tmp_path):
    return tmp_path / "cfg" / "clusters.json"


def test_to_dict():
    assert Cluster("prod", "https://api.example.com:6443").to_dict() == {
        "name": "prod",
        "url": "https://api.example.com:6443",
    }


def test_default_path_under_home(tmp_path):
    result = default_clusters_path(tmp_path)
    assert result == tmp_path / ".config" / "oc-multicluster-tui" / "clusters.json"


def test_save_load_round_trip(path):
    clusters = [Cluster("a", "https://a.example.com"), Cluster("b", "https://b.example.com")]
    save_clusters(clusters, path)
    assert load_clusters(path) == clusters


def test_saved_format_is_indented_json(path):
    save_clusters([Cluster("a", "u")], path)
    assert path.read_text() == '[\n  {\n    "name": "a",\n    "url": "u"\n  }\n]\n'


def test_html_characters_escaped_and_round_trip(path):
    clusters = [Cluster("a<b>&c", "https://x.example.com")]
    save_clusters(clusters, path)
    text = path.read_text()
    assert "<" not in text and "&" not in text
    assert load_clusters(path) == clusters


def test_load_null_is_empty(path):
    path.parent.mkdir(parents=True)
    path.write_text("null")
    assert load_clusters(path) == []


def test_load_missing_fields_default_empty(path):
    path.parent.mkdir(parents=True)
    path.write_text('[{"name": "only"}, {"extra": 1}]')
    assert load_clusters(path) == [Cluster("only", ""), Cluster("", "")]


def test_load_non_list_raises(path):
    path.parent.mkdir(parents=True)
    path.write_text('{"name": "a"}')
    with pytest.raises(ValueError):
        load_clusters(path)


def test_load_invalid_json_raises(path):
    path.parent.mkdir(parents=True)
    path.write_text("not json")
    with pytest.raises(ValueError):
        load_clusters(path)


def test_load_missing_file_raises(path):
    with pytest.raises(FileNotFoundError):
        load_clusters(path)


def test_reset_removes_file(path):
    save_clusters([Cluster("a", "u")], path)
    out = io.StringIO()
    reset_clusters_file(path, out)
    assert not path.exists()
    assert f"Clusters file reset to default state at {path}" in out.getvalue()


def test_reset_missing_file_raises(path):
    with pytest.raises(FileNotFoundError):
        reset_clusters_file(path, io.StringIO())


def test_delete_cluster(path):
    save_clusters([Cluster("a", "ua"), Cluster("b", "ub"), Cluster("a", "uc")], path)
    out = io.StringIO()
    remaining = delete_cluster("a", path, out)
    assert remaining == [Cluster("b", "ub")]
    assert load_clusters(path) == [Cluster("b", "ub")]
    assert f"Cluster 'a' deleted and changes saved to {path}" in out.getvalue()


def test_delete_unknown_keeps_all(path):
    clusters = [Cluster("a", "ua")]
    save_clusters(clusters, path)
    assert delete_cluster("zzz", path, io.StringIO()) == clusters
    assert load_clusters(path) == clusters


def test_delete_missing_file_raises(path):
    with pytest.raises(OSError):
        delete_cluster("a", path, io.StringIO())


def test_list_clusters_output(path):
    save_clusters([Cluster("a", "ua"), Cluster("b", "ub")], path)
    out = io.StringIO()
    result = list_clusters(path, out)
    assert len(result) == 2
    assert out.getvalue().splitlines() == ["Clusters:", "- a: ua", "- b: ub"]


def test_list_empty(path):
    save_clusters([], path)
    out = io.StringIO()
    assert list_clusters(path, out) == []
    assert out.getvalue().strip() == "No clusters found."


def test_prompt_clusters_fresh():
    ask = scripted("a", "ua", "y", "b", "ub", "n")
    result = prompt_clusters(None, ask, io.StringIO())
    assert result == [Cluster("a", "ua"), Cluster("b", "ub")]
    assert ask.prompts[:3] == ["Enter cluster name: ", "Enter cluster API URL: ", "Add another cluster? (y/n): "]


def test_prompt_fresh_allows_duplicates():
    ask = scripted("a", "ua", "Y", "a", "ua", "n")
    result = prompt_clusters(None, ask, io.StringIO())
    assert result == [Cluster("a", "ua"), Cluster("a", "ua")]


def test_prompt_uses_first_word_and_stops_at_eof():
    ask = scripted("name extra", "  url  ")
    result = prompt_clusters(None, ask, io.StringIO())
    assert result == [Cluster("name", "url")]


def test_prompt_rejects_duplicates_against_existing():
    existing = [Cluster("a", "ua")]
    ask = scripted("a", "b", "ua", "ub", "n")
    out = io.StringIO()
    result = prompt_clusters(existing, ask, out)
    assert result == [Cluster("a", "ua"), Cluster("b", "ub")]
    assert "Cluster name already exists. Please enter a unique name." in out.getvalue()
    assert "Cluster URL already exists. Please enter a unique URL." in out.getvalue()


def test_setup_help():
    out = io.StringIO()
    setup_help(out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "Usage: oc-multicluster-tui setup [flags]"
    assert len(lines) == 7


def test_run_setup_help(path):
    out = io.StringIO()
    run_setup(options(help=True, list=True), path, scripted(), out)
    assert out.getvalue().startswith("Usage: oc-multicluster-tui setup [flags]")
    assert not path.exists()


def test_run_setup_creates_file(path):
    out = io.StringIO()
    run_setup(options(), path, scripted("a", "ua", "n"), out)
    assert load_clusters(path) == [Cluster("a", "ua")]
    text = out.getvalue()
    assert "Creating new clusters file..." in text
    assert f"Clusters saved to {path}" in text


def test_run_setup_existing_skips(path):
    save_clusters([Cluster("a", "ua")], path)
    out = io.StringIO()
    run_setup(options(), path, scripted("x", "ux", "n"), out)
    assert "Config file already exists, skipping setup." in out.getvalue()
    assert load_clusters(path) == [Cluster("a", "ua")]


def test_run_setup_append(path):
    save_clusters([Cluster("a", "ua")], path)
    out = io.StringIO()
    run_setup(options(append=True), path, scripted("b", "ub", "n"), out)
    assert load_clusters(path) == [Cluster("a", "ua"), Cluster("b", "ub")]
    assert "Appending to existing clusters file..." in out.getvalue()
    assert f"Clusters appended and saved to {path}" in out.getvalue()


def test_run_setup_delete(path):
    save_clusters([Cluster("a", "ua"), Cluster("b", "ub")], path)
    run_setup(options(delete_cluster="a"), path, scripted(), io.StringIO())
    assert load_clusters(path) == [Cluster("b", "ub")]


def test_run_setup_reset_then_prompts(path):
    save_clusters([Cluster("a", "ua")], path)
    out = io.StringIO()
    run_setup(options(reset=True), path, scripted("c", "uc", "n"), out)
    assert load_clusters(path) == [Cluster("c", "uc")]
    assert "Creating new clusters file..." not in out.getvalue()


def test_run_setup_list(path):
    save_clusters([Cluster("a", "ua")], path)
    out = io.StringIO()
    run_setup(options(list=True), path, scripted(), out)
    assert out.getvalue().splitlines() == ["Clusters:", "- a: ua"]


def test_run_setup_list_missing_file_reports(path):
    out = io.StringIO()
    run_setup(options(list=True), path, scripted(), out)
    assert out.getvalue().startswith("Error opening clusters file:")
    assert not Path(path).exists()