import pytest

from umldoc.adapters.java_adapter import JavaAdapter
from umldoc.indent import IndentingWriter


SHAPES = {
    "Shape.java": """
    package com.example.shapes;

    public abstract class Shape {
        protected String name;

        public abstract double area();
    }
    """,
    "Circle.java": """
    package com.example.shapes;

    @Deprecated
    public class Circle extends Shape {
        private double radius;

        public Circle(double radius) {
            this.radius = radius;
        }

        public double area() {
            return Math.PI * radius * radius;
        }
    }
    """,
    "Drawing.java": """
    package com.example.shapes;

    import java.util.List;

    public class Drawing implements Renderable {
        private List<Shape> shapes;
        public Color background;

        public void add(Shape shape) {
        }

        public Canvas render(int width, int height) {
            return null;
        }
    }
    """,
    "Renderable.java": """
    package com.example.shapes;

    public interface Renderable {
        Canvas render(int width, int height);
    }
    """,
    "Canvas.java": """
    package com.example.shapes;

    public class Canvas {
    }
    """,
    "Color.java": """
    package com.example.shapes;

    public enum Color {
        RED, GREEN, BLUE
    }
    """,
    "Marker.java": """
    package com.example.shapes;

    public @interface Marker {
        String value();
    }
    """,
    "Box.java": """
    package com.example.shapes;

    public class Box<T> {
        public T value;

        public T get() {
            return value;
        }
    }
    """,
}


@pytest.fixture
def shapes_sources():
    return dict(SHAPES)


@pytest.fixture
def shapes_graph(shapes_sources):
    return JavaAdapter().build_graph_for_sources(shapes_sources)


@pytest.fixture
def render():
    def _render(part) -> str:
        output = IndentingWriter()
        part.write_to(output)
        return output.getvalue()
    return _render
