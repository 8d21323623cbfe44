"""Pydantic models for the project config file."""

from pydantic import BaseModel, Field


class Author(BaseModel):
    """Reviewer identity shown at the top of every review."""

    name: str = Field(description="Author name and surname")
    contacts: str = Field(description="Contacts of the author (Telegram for example)")

    model_config = {"frozen": True}

    def display_line(self) -> str:
        return f"Author: {self.name}(tg: {self.contacts})"


class TaskRecord(BaseModel):
    """One reviewable task as stored in the config file."""

    name: str = Field(min_length=1, description="Task name, also its directory name")
    code_file_name: str = Field(
        min_length=1,
        description="Name of the code file inside tasks/<name>/",
    )
    notes_ledger: str = Field(description="Path to the task's bank ledger file")

    model_config = {"extra": "forbid"}


class ProjectConfigFile(BaseModel):
    """Schema of config.json."""

    author_name: str
    author_contacts: str
    tasks: list[TaskRecord] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    def author(self) -> Author:
        return Author(name=self.author_name, contacts=self.author_contacts)
