"""HTML page rendering."""

from fastapi.templating import Jinja2Templates

from onboard.util.templates import environment

templates = Jinja2Templates(env=environment)
