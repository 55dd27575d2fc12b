# umldoc/main.py

from __future__ import annotations

import logging
from typing import Dict, List, Literal, Optional

from fastapi import FastAPI, HTTPException  # type: ignore
from fastapi.middleware.cors import CORSMiddleware  # type: ignore
from pydantic import BaseModel, Field  # type: ignore

from umldoc import __version__
from umldoc.adapters.java_adapter import JavaAdapter
from umldoc.builder import DiagramBuilder
from umldoc.cir.graph import DeclarationGraph
from umldoc.config import RenderConfig
from umldoc.sinks import SvgRenderSink
from umldoc.uml.diagram import UMLDiagram

logger = logging.getLogger(__name__)

app = FastAPI(title="UML Doc Generator (Java -> PlantUML)", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

java_adapter = JavaAdapter()


class SourceFile(BaseModel):
    filename: str
    code: str


class UMLRequest(BaseModel):
    files: List[SourceFile] = Field(default_factory=list)
    diagram_type: Literal["class", "package", "all"] = "all"
    type_name: Optional[str] = None  # qualified name, for diagram_type == "class"
    package: Optional[str] = None    # for diagram_type == "package"
    render_svg: bool = False
    config: RenderConfig = Field(default_factory=RenderConfig)


class DiagramOut(BaseModel):
    path: str
    plantuml: str
    svg: Optional[str] = None
    error: Optional[str] = None


class UMLResponse(BaseModel):
    diagrams: List[DiagramOut]
    parse_errors: List[Dict[str, str]] = Field(default_factory=list)


@app.get("/health")
def health():
    return {"status": "ok"}


def _select_diagrams(req: UMLRequest, graph: DeclarationGraph) -> List[UMLDiagram]:
    builder = DiagramBuilder(graph, req.config)

    if req.diagram_type == "class":
        if not req.type_name:
            raise HTTPException(status_code=400, detail="'type_name' is required for class diagrams.")
        type_id = DeclarationGraph.type_id(req.type_name)
        if not graph.has_type(type_id):
            raise HTTPException(status_code=404, detail=f"Unknown type: {req.type_name}")
        return [builder.class_diagram(type_id)]

    if req.diagram_type == "package":
        packages = graph.packages()
        package = req.package if req.package is not None else (packages[0] if len(packages) == 1 else None)
        if package is None:
            raise HTTPException(status_code=400, detail="'package' is required when sources span several packages.")
        if package not in packages:
            raise HTTPException(status_code=404, detail=f"Unknown package: {package}")
        return [builder.package_diagram(package)]

    return builder.build_all()


@app.post("/uml", response_model=UMLResponse)
def uml(req: UMLRequest) -> UMLResponse:
    if not req.files:
        raise HTTPException(status_code=400, detail="Provide at least one Java source file.")

    # 1) Sources -> declaration graph
    graph = java_adapter.build_graph_for_sources({f.filename: f.code for f in req.files})

    # 2) Graph -> UML model -> PlantUML
    svg_sink = SvgRenderSink() if req.render_svg else None
    diagrams: List[DiagramOut] = []
    for diagram in _select_diagrams(req, graph):
        out = DiagramOut(path=diagram.file_path, plantuml=diagram.render())

        # 3) PlantUML -> SVG (failures are reported per diagram)
        if svg_sink is not None:
            try:
                out.svg = svg_sink.render(out.plantuml)
            except (ValueError, RuntimeError) as e:
                logger.warning("SVG render failed for %s: %s", out.path, e)
                out.error = str(e)
        diagrams.append(out)

    return UMLResponse(diagrams=diagrams, parse_errors=graph.parse_errors)
