from conftest import write_file


def test_list_rulesets(client):
    r = client.get("/api/v1/rulesets")
    assert r.status_code == 200
    body = r.json()
    assert body["count"] == 3
    assert len(body["fingerprint"]) == 16
    assert [x["slug"] for x in body["rulesets"]] == ["docs", "general", "python"]
    python = body["rulesets"][2]
    assert python["globs"] == ["**/*.py"]
    assert python["title"] == "Python Ruleset"


def test_get_ruleset_detail(client):
    r = client.get("/api/v1/rulesets/docs")
    assert r.status_code == 200
    body = r.json()
    assert body["trigger"] == "model_decision"
    assert body["version"] == "0.2.0"
    assert "Keep headings short." in body["body"]


def test_get_unknown_ruleset_404(client):
    r = client.get("/api/v1/rulesets/nope")
    assert r.status_code == 404


def test_match_rulesets(client):
    r = client.get("/api/v1/rulesets/match", params={"path": "src/app/main.py"})
    assert r.status_code == 200
    body = r.json()
    assert body["path"] == "src/app/main.py"
    assert [x["slug"] for x in body["rulesets"]] == ["general", "python"]


def test_match_requires_path(client):
    assert client.get("/api/v1/rulesets/match").status_code == 422


def test_index_preview(client, corpus_root):
    body = client.get("/api/v1/index/preview").json()
    assert body["index_exists"] is True
    assert body["current"] is False
    assert body["block"].startswith("<!-- rulesets:begin -->")

    write_file(corpus_root, "RULESETS_INDEX.md", "# Index\n\n" + body["block"] + "\n")
    assert client.get("/api/v1/index/preview").json()["current"] is True


def test_missing_corpus_is_503(client, monkeypatch, tmp_path):
    monkeypatch.setenv("PLAYBOOKS_ROOT", str(tmp_path / "missing"))
    r = client.get("/api/v1/rulesets")
    assert r.status_code == 503


def test_list_survives_impossible_date(client, corpus_root):
    write_file(
        corpus_root,
        "bad-date-ruleset.md",
        "---\ntrigger: manual\ndescription: Ruleset with an impossible date.\nlast_updated: 2024-02-30\n---\n# Bad date\n",
    )
    r = client.get("/api/v1/rulesets")
    assert r.status_code == 200
    assert r.json()["count"] == 3


def test_index_preview_non_utf8_index(client, corpus_root):
    (corpus_root / "RULESETS_INDEX.md").write_bytes(b"# Index caf\xe9\n")
    r = client.get("/api/v1/index/preview")
    assert r.status_code == 200
    body = r.json()
    assert body["readable"] is False
    assert body["current"] is False
