from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

STARTER_HTML = """<div class="container">
    <h1>Welcome to Code Playground!</h1>
    <p>Start editing HTML, CSS, and JavaScript to see your changes live.</p>
    <button id="demo-btn" class="btn">Click me!</button>
</div>"""

STARTER_CSS = """/* Add your CSS here */
.container {
    font-family: Arial, sans-serif;
    max-width: 800px;
    margin: 0 auto;
    padding: 20px;
    text-align: center;
}

h1 {
    color: #316dca;
}

p {
    color: #333;
    margin-bottom: 20px;
}

.btn {
    background-color: #3a99f4;
    color: white;
    border: none;
    padding: 10px 20px;
    border-radius: 5px;
    cursor: pointer;
}

.btn:hover {
    background-color: #2980b9;
}"""

STARTER_JS = """// Add your JavaScript here
document.getElementById('demo-btn').addEventListener('click', function() {
    alert('Button clicked!');
});"""


@dataclass
class Project:
    name: str
    html: str = ""
    css: str = ""
    js: str = ""
    last_modified: Optional[str] = None

    @classmethod
    def starter(cls) -> "Project":
        return cls(name="Untitled", html=STARTER_HTML, css=STARTER_CSS, js=STARTER_JS)

    def sources(self) -> dict:
        return {"html": self.html, "css": self.css, "js": self.js}


@dataclass
class ProjectSummary:
    name: str
    last_modified: str

    def to_dict(self) -> dict:
        return {"name": self.name, "lastModified": self.last_modified}

    @classmethod
    def from_metadata(cls, data: dict, fallback_name: str, fallback_modified: str) -> "ProjectSummary":
        name = data.get("name")
        last_modified = data.get("lastModified")
        return cls(
            name=name if isinstance(name, str) and name else fallback_name,
            last_modified=last_modified if isinstance(last_modified, str) and last_modified else fallback_modified,
        )
