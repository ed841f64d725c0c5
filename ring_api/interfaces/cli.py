"""Command-line interface for the RING web service client."""

from __future__ import annotations

import argparse
import asyncio
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ring_api.core.errors import RingError
from ring_api.core.settings import Settings, get_settings
from ring_api.models.base import ResponseModel
from ring_api.models.parameters import InteractionType, NetworkPolicy, RingParameters, Thresholds
from ring_api.models.responses import ResultResponse, StatusResponse, SubmitResponse
from ring_api.services.ring_client import AsyncRingClient, RingClient
from ring_api.services.transport import ClientConfig
from ring_api.utils.logger import configure_logging
from ring_api.workflows.ring_network_job import RingNetworkJobWorkflow

console = Console()

PREVIEW_ROWS = 20


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ring-api",
        description="Compute residue interaction networks with the RING web service",
    )
    parser.add_argument("--base-url", help="Override the service URL (defaults to configuration)")
    parser.add_argument("--timeout", type=float, help="Seconds to wait for each HTTP response")
    parser.add_argument("--json", action="store_true", help="Print raw JSON instead of tables")

    job_options = argparse.ArgumentParser(add_help=False)
    job_options.add_argument("--chain", default="all", help="Chain identifier or 'all'")
    job_options.add_argument(
        "--policy",
        choices=[policy.value for policy in NetworkPolicy],
        default=NetworkPolicy.CLOSEST.value,
        help="Atoms used to measure residue contacts",
    )
    job_options.add_argument(
        "--interactions",
        choices=[kind.value for kind in InteractionType],
        default=InteractionType.MULTIPLE.value,
        help="How many interactions to report per residue pair",
    )
    job_options.add_argument(
        "--relaxed",
        action="store_true",
        help="Use the inclusive distance thresholds instead of the strict ones",
    )
    job_options.add_argument("--sequence-separation", type=int, default=3)

    commands = parser.add_subparsers(dest="command", required=True)

    submit = commands.add_parser("submit", parents=[job_options], help="Submit a PDB id")
    submit.add_argument("pdb_id", help="PDB code, e.g. 1ABC")

    upload = commands.add_parser("upload", parents=[job_options], help="Submit a local PDB file")
    upload.add_argument("pdb_file", help="Path to a .pdb file")

    status = commands.add_parser("status", help="Show the state of a job")
    status.add_argument("job_id")

    result = commands.add_parser("result", help="Fetch the network of a finished job")
    result.add_argument("job_id")

    run = commands.add_parser(
        "run", parents=[job_options], help="Submit, wait for completion and fetch the network"
    )
    source = run.add_mutually_exclusive_group(required=True)
    source.add_argument("--pdb-id")
    source.add_argument("--pdb-file")
    return parser


def _parameters(args: argparse.Namespace) -> RingParameters:
    return RingParameters(
        chain=args.chain,
        network_policy=NetworkPolicy(args.policy),
        interactions=InteractionType(args.interactions),
        thresholds=Thresholds.relaxed() if args.relaxed else Thresholds.strict(),
        sequence_separation=args.sequence_separation,
    )


def _client_config(args: argparse.Namespace, settings: Settings) -> ClientConfig:
    config = ClientConfig.from_settings(settings)
    overrides = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.timeout is not None:
        overrides["timeout_seconds"] = args.timeout
    if not overrides:
        return config
    return ClientConfig(**{**config.model_dump(), **overrides})


def _render(response: ResponseModel, as_json: bool) -> None:
    if as_json:
        console.print_json(data=response.to_payload())
        return
    if isinstance(response, ResultResponse):
        _render_result(response)
    elif isinstance(response, StatusResponse):
        console.print(f"Job [bold]{response.job_id}[/bold]: {response.status.label}")
    elif isinstance(response, SubmitResponse):
        console.print(f"Submitted job [bold]{response.job_id}[/bold] ({response.status.label})")


def _render_result(response: ResultResponse) -> None:
    console.print(
        f"Job [bold]{response.job_id}[/bold]: {len(response.nodes)} residues, "
        f"{len(response.edges)} interactions"
    )
    table = Table(title="Interactions", show_lines=False)
    for column in ("Residue 1", "Residue 2", "Interaction", "Distance", "Energy"):
        table.add_column(column)
    for edge in response.edges[:PREVIEW_ROWS]:
        table.add_row(
            edge.source,
            edge.target,
            edge.interaction,
            "" if edge.distance is None else f"{edge.distance:.2f}",
            "" if edge.energy is None else f"{edge.energy:.2f}",
        )
    console.print(table)
    if len(response.edges) > PREVIEW_ROWS:
        console.print(f"... {len(response.edges) - PREVIEW_ROWS} more, use --json for all")


def _dispatch(args: argparse.Namespace, settings: Settings) -> ResponseModel:
    config = _client_config(args, settings)
    if args.command == "run":
        workflow = RingNetworkJobWorkflow(
            AsyncRingClient(config),
            poll_interval_seconds=settings.workflows.poll_interval_seconds,
            max_polls=settings.workflows.max_polls,
        )
        return asyncio.run(
            workflow.run(
                pdb_id=args.pdb_id,
                pdb_file=args.pdb_file,
                parameters=_parameters(args),
            )
        )

    client = RingClient(config)
    if args.command == "submit":
        return client.submit_pdb_id(args.pdb_id, _parameters(args))
    if args.command == "upload":
        return client.submit_pdb_file(args.pdb_file, _parameters(args))
    if args.command == "status":
        return client.status(args.job_id)
    return client.result(args.job_id)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        configure_logging(settings.app.log_level, json=settings.app.log_json)
        response = _dispatch(args, settings)
    except (RingError, FileNotFoundError) as exc:
        console.print(f"[bold red]error:[/bold red] {escape(str(exc))}")
        return 1

    _render(response, args.json)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
