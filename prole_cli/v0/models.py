"""Pydantic models for v0 API responses."""

from pydantic import BaseModel, ConfigDict, Field


class V0File(BaseModel):
    """A file generated by v0."""

    name: str
    content: str = ""


class V0Version(BaseModel):
    """A generated version of a chat."""

    model_config = ConfigDict(populate_by_name=True)

    demo_url: str | None = Field(default=None, alias="demoUrl")
    files: list[V0File] = []


class V0Chat(BaseModel):
    """Response of the chat creation endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    web_url: str | None = Field(default=None, alias="webUrl")
    latest_version: V0Version | None = Field(default=None, alias="latestVersion")

    @property
    def demo_url(self) -> str | None:
        return self.latest_version.demo_url if self.latest_version else None

    @property
    def component_files(self) -> list[V0File]:
        """Generated .tsx components, excluding page files."""
        if self.latest_version is None:
            return []
        return [f for f in self.latest_version.files if f.name.endswith(".tsx") and "page.tsx" not in f.name]
