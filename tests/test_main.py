import requests
from fastapi.testclient import TestClient

from umldoc.main import app

client = TestClient(app)


def files(sources):
    return [{"filename": name, "code": code} for name, code in sources.items()]


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_package_diagram(shapes_sources):
    r = client.post("/uml", json={"files": files(shapes_sources), "diagram_type": "package"})
    assert r.status_code == 200
    body = r.json()
    assert [d["path"] for d in body["diagrams"]] == ["com/example/shapes/package.puml"]
    assert body["diagrams"][0]["plantuml"].startswith("@startuml\n  namespace com.example.shapes {\n")
    assert body["diagrams"][0]["svg"] is None
    assert body["parse_errors"] == []


def test_class_diagram_with_config(shapes_sources):
    r = client.post("/uml", json={
        "files": files(shapes_sources),
        "diagram_type": "class",
        "type_name": "com.example.shapes.Circle",
        "config": {"create_links": False, "add_package_to_name": False, "visibilities": ["private"]},
    })
    assert r.status_code == 200
    plantuml = r.json()["diagrams"][0]["plantuml"]
    assert "  class com.example.shapes.Circle <<deprecated>> {\n" in plantuml
    assert "    -radius: double\n" in plantuml
    assert "area()" not in plantuml


def test_all_diagrams_report_parse_errors(shapes_sources):
    sources = dict(shapes_sources, **{"Broken.java": "public class Broken {"})
    r = client.post("/uml", json={"files": files(sources)})
    assert r.status_code == 200
    body = r.json()
    assert len(body["diagrams"]) == 1 + len(shapes_sources)
    assert [e["file"] for e in body["parse_errors"]] == ["Broken.java"]


def test_request_errors(shapes_sources):
    assert client.post("/uml", json={"files": []}).status_code == 400

    r = client.post("/uml", json={"files": files(shapes_sources), "diagram_type": "class"})
    assert r.status_code == 400

    r = client.post("/uml", json={
        "files": files(shapes_sources), "diagram_type": "class", "type_name": "com.example.Nope",
    })
    assert r.status_code == 404

    r = client.post("/uml", json={
        "files": files(shapes_sources), "diagram_type": "package", "package": "com.example.nope",
    })
    assert r.status_code == 404

    r = client.post("/uml", json={"files": files(shapes_sources), "diagram_type": "sequence"})
    assert r.status_code == 422


def test_package_required_for_several_packages():
    sources = {
        "A.java": "package a; public class A {}",
        "B.java": "package b; public class B {}",
    }
    r = client.post("/uml", json={"files": files(sources), "diagram_type": "package"})
    assert r.status_code == 400

    r = client.post("/uml", json={"files": files(sources), "diagram_type": "package", "package": "b"})
    assert r.status_code == 200
    assert r.json()["diagrams"][0]["path"] == "b/package.puml"


def test_svg_failures_are_reported_per_diagram(shapes_sources, monkeypatch):
    def unreachable(url, timeout):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr("umldoc.sinks.requests.get", unreachable)
    r = client.post("/uml", json={
        "files": files(shapes_sources), "diagram_type": "package", "render_svg": True,
    })
    assert r.status_code == 200
    diagram = r.json()["diagrams"][0]
    assert diagram["svg"] is None
    assert "SVG render failed" in diagram["error"]
