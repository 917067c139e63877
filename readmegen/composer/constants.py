"""Section titles and fixed copy used by the README composer."""

from __future__ import annotations

SECTION_TITLES: dict[str, str] = {
    "about": "About",
    "features": "Features",
    "tech_stack": "Tech Stack",
    "languages": "Languages",
    "getting_started": "Getting Started",
    "prerequisites": "Prerequisites",
    "installation": "Installation",
    "running_locally": "Running Locally",
    "scripts": "Scripts",
    "dependencies": "Dependencies",
    "dev_dependencies": "Dev Dependencies",
    "configuration": "Configuration",
    "usage": "Usage",
    "docker": "Docker",
    "ci": "Continuous Integration",
    "folder_structure": "Folder Structure",
    "contributing": "Contributing",
    "roadmap": "Roadmap",
    "security": "Security",
    "license": "License",
    "acknowledgements": "Acknowledgements",
    "faq": "FAQ",
}

PLACEHOLDER_FEATURES: tuple[str, ...] = (
    "- Clear and well-organized project structure",
    "- Simple local setup with a single install command",
    "- Easy to extend and customize",
)

MAX_LISTED_DEPENDENCIES = 50

EMPTY_SCRIPTS_ROW = "| - | - | No scripts defined in `package.json` |"

EXAMPLE_ENV_BLOCK = (
    "```env\n"
    "# Server\n"
    "PORT=3000\n"
    "NODE_ENV=development\n"
    "\n"
    "# External services\n"
    "API_URL=http://localhost:3000/api\n"
    "API_KEY=your-api-key\n"
    "```"
)

CONTRIBUTING_BODY = (
    "Contributions are welcome! Please open an issue or submit a pull request.\n"
    "\n"
    "1. Fork the project\n"
    "2. Create your feature branch (`git checkout -b feature/amazing-feature`)\n"
    "3. Commit your changes (`git commit -m 'Add some amazing feature'`)\n"
    "4. Push to the branch (`git push origin feature/amazing-feature`)\n"
    "5. Open a pull request"
)

ROADMAP_BODY = (
    "- [ ] Improve documentation and examples\n"
    "- [ ] Add more automated tests\n"
    "- [ ] Collect feedback and plan the next release"
)

ACKNOWLEDGEMENTS_BODY = (
    "- [Shields.io](https://shields.io) for the badges\n"
    "- [GitHub REST API](https://docs.github.com/rest) for repository metadata\n"
    "- Everyone who contributes issues, ideas and code"
)

FAQ_BODY = (
    "**Q: How do I report a bug?**\n"
    "A: Open an issue with steps to reproduce, the expected result and what actually happened.\n"
    "\n"
    "**Q: Can I use this project commercially?**\n"
    "A: Check the license section above; the terms of the license apply."
)

CLOSING_LINE = "> Generated with readmegen."


def security_body(owner: str, repo: str) -> str:
    return (
        "If you discover a security vulnerability, please do not open a public issue. "
        f"Report it privately through [GitHub security advisories](https://github.com/{owner}/{repo}/security/advisories/new) "
        "so it can be fixed before disclosure."
    )


__all__ = [
    "ACKNOWLEDGEMENTS_BODY",
    "CLOSING_LINE",
    "CONTRIBUTING_BODY",
    "EMPTY_SCRIPTS_ROW",
    "EXAMPLE_ENV_BLOCK",
    "FAQ_BODY",
    "MAX_LISTED_DEPENDENCIES",
    "PLACEHOLDER_FEATURES",
    "ROADMAP_BODY",
    "SECTION_TITLES",
    "security_body",
]
