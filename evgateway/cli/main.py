import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from gateway.providers.settings import get_settings

app = typer.Typer(help="CLI for searching charging stations and points of interest through the EV gateway")
console = Console()


def _api_url() -> str:
    return get_settings().evgateway_api_url.rstrip("/")


def _post_search(endpoint: str, payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Post a search to the gateway and return the decoded body, or None on error.
    """
    try:
        response = httpx.post(f"{_api_url()}/tomtom/{endpoint}", json=payload, timeout=60.0)
        response.raise_for_status()
        return response.json()
    except httpx.HTTPStatusError as e:
        console.print(f"[bold red]HTTP error: {e.response.status_code} - {e.response.text}")
    except httpx.RequestError as e:
        console.print(f"[bold red]Request error: {str(e)}")
    return None


def _format_distance(value: Any) -> str:
    if isinstance(value, (int, float)):
        return f"{value / 1000:.1f}"
    return "-" if value is None else str(value)


def _render(title: str, places: List[Dict[str, Any]], total: int) -> None:
    if not places:
        console.print("[yellow]No results found.")
        return

    table = Table(title=title, show_header=True, header_style="bold green")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Address")
    table.add_column("Distance (km)", justify="right")
    table.add_column("Phone")

    for place in places:
        table.add_row(
            place.get("name", ""),
            place.get("category", ""),
            place.get("address", ""),
            _format_distance(place.get("distance")),
            place.get("phone") or "",
        )

    console.print(table)
    console.print(f"[green]Total: [bold]{total}[/]")


def _save(body: Dict[str, Any], output_file: Optional[Path]) -> None:
    if output_file is None:
        return
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(body, f, ensure_ascii=False, indent=2)
    console.print(f"[green]Results saved to [bold]{output_file}[/]")


@app.command()
def stations(
    latitude: float = typer.Argument(..., help="Search center latitude"),
    longitude: float = typer.Argument(..., help="Search center longitude"),
    radius: int = typer.Option(50000, help="Search radius in meters"),
    limit: int = typer.Option(100, help="Maximum results per sub-query"),
    charger_type: Optional[str] = typer.Option(None, help="Charger type filter (fast, level2)"),
    output_file: Optional[Path] = typer.Option(None, help="File to save the JSON response to"),
):
    """
    Search charging stations near a point.
    """
    payload = {"latitude": latitude, "longitude": longitude, "radius": radius, "limit": limit}
    if charger_type:
        payload["chargerType"] = charger_type

    with console.status("[bold green]Searching charging stations..."):
        body = _post_search("charging-stations", payload)

    if body is None:
        raise typer.Exit(code=1)

    data = body.get("data", {})
    _render("Charging stations", data.get("stations", []), data.get("totalResults", 0))
    _save(body, output_file)


@app.command()
def pois(
    latitude: float = typer.Argument(..., help="Search center latitude"),
    longitude: float = typer.Argument(..., help="Search center longitude"),
    radius: int = typer.Option(50000, help="Search radius in meters"),
    limit: int = typer.Option(100, help="Maximum results per sub-query"),
    category: Optional[List[str]] = typer.Option(None, help="POI category (repeatable); defaults to parks"),
    output_file: Optional[Path] = typer.Option(None, help="File to save the JSON response to"),
):
    """
    Search categorized points of interest near a point.
    """
    payload: Dict[str, Any] = {"latitude": latitude, "longitude": longitude, "radius": radius, "limit": limit}
    if category:
        payload["categories"] = category

    with console.status("[bold green]Searching points of interest..."):
        body = _post_search("pois", payload)

    if body is None:
        raise typer.Exit(code=1)

    data = body.get("data", {})
    _render("Points of interest", data.get("pois", []), data.get("totalResults", 0))
    _save(body, output_file)


def main():
    app()


if __name__ == "__main__":
    main()
