import asyncio
import os

import typer
import uvicorn

from src.core.config import settings
from src.core.database import Database
from src.apps.blog.models.post import ContentType
from src.apps.blog.services.render_service import render_content

app = typer.Typer(help="Blogify management commands.")


# ---------------------------
# Helpers
# ---------------------------
async def _create_tables(db_url: str) -> None:
    database = Database(db_url)
    try:
        await database.create_tables()
    finally:
        await database.disconnect()


# ---------------------------
# Commands
# ---------------------------
@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
    port: int = typer.Option(8000, help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the API server."""
    uvicorn.run("src.main:app", host=host, port=port, reload=reload, log_level="info")


@app.command()
def init_db(
    database_url: str = typer.Option(
        settings.ASYNC_DATABASE_URL, "--database-url", help="Async database URL"
    ),
):
    """Create the database tables."""
    asyncio.run(_create_tables(database_url))
    print(f"✅ Tables created in {database_url}")


@app.command()
def render(
    path: str,
    content_type: ContentType = typer.Option(
        ContentType.MARKDOWN, "--content-type", "-t", help="How to interpret the file"
    ),
    title: str = typer.Option("", "--title", help="Post title; a matching leading H1 is dropped"),
):
    """Render a post body file to HTML."""
    if not os.path.isfile(path):
        print(f"❌ File not found: {path}")
        raise typer.Exit(1)

    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    typer.echo(render_content(content, content_type, title), nl=False)


# ---------------------------
# Entrypoint
# ---------------------------
if __name__ == "__main__":
    app()
