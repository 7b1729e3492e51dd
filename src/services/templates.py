"""
Email template utilities.

Templates are packaged with the Lambda under src/templates/.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# src/services/templates.py -> src/templates/
TEMPLATES_DIR = Path(__file__).parent.parent / 'templates'


def load_template(template_name: str) -> str:
    """
    Read a packaged template.

    Raises:
        ValueError: If the template file doesn't exist
    """
    template_path = TEMPLATES_DIR / template_name

    try:
        return template_path.read_text(encoding='utf-8')
    except FileNotFoundError:
        logger.error(f"Template not found: {template_path}")
        raise ValueError(f"Template '{template_name}' not found in {TEMPLATES_DIR}")


def format_template(template: str, **variables) -> str:
    """
    Format template with variables.

    Values are substituted literally; str.format() does not re-parse them.

    Raises:
        ValueError: If the template references a variable that wasn't supplied

    Example:
        >>> format_template("<a href=\\"{url}\\">Download</a>", url="https://x/y")
        '<a href="https://x/y">Download</a>'
    """
    try:
        return template.format(**variables)
    except KeyError as e:
        missing_var = str(e).strip("'")
        logger.error(f"Missing variable in email template: {missing_var}")
        raise ValueError(f"Missing required variable in template: {missing_var}")
