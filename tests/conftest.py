"""Shared fixtures: a small front-end project tree on disk."""

from pathlib import Path

import pytest
import structlog

from fragment_factories.config import GeneratorConfig

SCHEMA = """
enum Role { ADMIN MEMBER }

enum Status { IN_REVIEW PUBLISHED }

scalar DateTime

interface Node {
  id: ID!
}

union Feed = User | Post

type User implements Node {
  id: ID!
  email: String!
  role: Role!
  tags: [String!]
  friend: User
  manager: User
  posts: [Post!]!
  profile: Profile
}

type Post {
  id: Int!
  title: String!
  status: Status!
  publishedAt: DateTime
  author: User!
}

type Profile {
  id: ID!
  bio: String
  owner: User!
}
"""


class Project:
    """Helper writing fragment documents under ``root/src``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.src = root / "src"
        self.src.mkdir()
        (root / "schema.graphql").write_text(SCHEMA, encoding="utf-8")

    def fragment(self, relpath: str, text: str) -> Path:
        path = self.src / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    def config(self, **kwargs) -> GeneratorConfig:
        return GeneratorConfig(root=self.root, **kwargs)

    def read(self, relpath: str) -> str:
        return (self.src / relpath).read_text(encoding="utf-8")

    def exists(self, relpath: str) -> bool:
        return (self.src / relpath).exists()


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configured by the command-line entry point."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def project(tmp_path):
    return Project(tmp_path.resolve())
