"""README section composition."""

from .builder import ReadmeComposer, Section, compose_readme, docker_tag

__all__ = ["ReadmeComposer", "Section", "compose_readme", "docker_tag"]
