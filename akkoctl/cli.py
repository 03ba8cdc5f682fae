"""Typer CLI entrypoint."""

from __future__ import annotations

import logging

import typer

from akkoctl.core.commands import GET_COMMANDS
from akkoctl.core.errors import AkkoctlError
from akkoctl.core.model import CommandResult, PerformanceSettings, ProfileInfo, RgbSettings
from akkoctl.core.packet import RGB_MODE_DAZZLE
from akkoctl.core.service import KeyboardService

app = typer.Typer(help="Akko keyboard configuration over HID feature reports")

_DECODERS = {
    "profile-count": ProfileInfo,
    "rgb-settings": RgbSettings,
    "performance": PerformanceSettings,
}


def _build_service() -> KeyboardService:
    service = KeyboardService()
    for warning in getattr(service, "load_warnings", ()):
        typer.echo(f"Warning: {warning}", err=True)
    return service


def _parse_byte(value: str, name: str) -> int:
    try:
        parsed = int(value, 0)
    except ValueError:
        raise typer.BadParameter(f"{name} must be decimal or 0x-prefixed hex, got {value!r}") from None
    if not 0 <= parsed <= 0xFF:
        raise typer.BadParameter(f"{name} must be in 0..255, got {parsed}")
    return parsed


def _parse_color(value: str) -> tuple[int, int, int]:
    text = value.strip().lstrip("#")
    if len(text) != 6:
        raise typer.BadParameter(f"color must be RRGGBB hex, got {value!r}")
    try:
        raw = bytes.fromhex(text)
    except ValueError:
        raise typer.BadParameter(f"color must be RRGGBB hex, got {value!r}") from None
    return raw[0], raw[1], raw[2]


def _echo_result(result: CommandResult) -> None:
    status = "ok" if result.success else "no-data"
    typer.echo(f"{result.opcode_name} (0x{result.opcode:02X}) {status}: {result.hex_preview}")


def _fail(exc: AkkoctlError) -> typer.Exit:
    typer.echo(f"Error: {exc}", err=True)
    return typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log protocol traffic to stderr"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command("models")
def list_models() -> None:
    """List supported keyboard models."""
    try:
        service = _build_service()
        for model in service.list_models():
            aliases = f" (aliases: {', '.join(model.aliases)})" if model.aliases else ""
            typer.echo(
                f"{model.id}: {model.name} VID=0x{model.vendor_id:04X} PID=0x{model.product_id:04X}{aliases}"
            )
    except AkkoctlError as exc:
        raise _fail(exc) from None


@app.command("devices")
def list_devices() -> None:
    """List supported keyboards that are currently connected."""
    try:
        names = _build_service().detect_models()
        if not names:
            typer.echo("No Akko keyboards found")
            return
        for name in names:
            typer.echo(name)
    except AkkoctlError as exc:
        raise _fail(exc) from None


@app.command("handshake")
def handshake(model: str) -> None:
    """Send the handshake and print the reply."""
    try:
        response = _build_service().handshake(model)
        typer.echo(" ".join(f"{b:02X}" for b in response[:16]))
    except AkkoctlError as exc:
        raise _fail(exc) from None


@app.command("get")
def get_setting(model: str, setting: str) -> None:
    """Read one setting, e.g. profile-count, rgb-settings, fn-lock, battery-status."""
    if setting not in GET_COMMANDS:
        raise typer.BadParameter(f"setting must be one of: {', '.join(GET_COMMANDS)}")
    decoder = _DECODERS.get(setting)
    try:
        result = _build_service().get_setting(model, setting)
        _echo_result(result)
        if decoder is not None:
            parsed = decoder.from_response(result.response)
            if parsed is not None:
                typer.echo(f"  {parsed}")
    except AkkoctlError as exc:
        raise _fail(exc) from None


@app.command("run-all")
def run_all(model: str) -> None:
    """Run every known read command in sequence."""
    try:
        for result in _build_service().run_all(model):
            _echo_result(result)
    except AkkoctlError as exc:
        raise _fail(exc) from None


@app.command("probe")
def probe(model: str, opcode: str) -> None:
    """Probe a single opcode."""
    value = _parse_byte(opcode, "opcode")
    try:
        result = _build_service().probe_opcode(model, value)
    except AkkoctlError as exc:
        raise _fail(exc) from None
    if not result.responded:
        typer.echo(f"0x{result.opcode:02X} {result.opcode_name}: no response")
    else:
        kind = "DATA" if result.has_data else "EMPTY"
        typer.echo(f"0x{result.opcode:02X} {result.opcode_name}: {kind} {result.hex_preview}")


@app.command("probe-range")
def probe_range(
    model: str,
    start: str = typer.Option("0x00", "--start", help="First opcode"),
    end: str = typer.Option("0xFF", "--end", help="Last opcode (inclusive)"),
    only_data: bool = typer.Option(False, "--only-data", help="Only print opcodes that returned data"),
) -> None:
    """Probe a range of opcodes and summarise which ones return data."""
    first = _parse_byte(start, "start")
    last = _parse_byte(end, "end")
    try:
        report = _build_service().probe_range(model, first, last)
    except AkkoctlError as exc:
        raise _fail(exc) from None
    for result in report.results:
        if only_data and not result.has_data:
            continue
        if not result.responded:
            kind = "ERROR"
        else:
            kind = "DATA" if result.has_data else "EMPTY"
        typer.echo(f"0x{result.opcode:02X} {result.opcode_name}: {kind} {result.hex_preview}".rstrip())
    typer.echo(f"{report.data_count}/{len(report.results)} opcodes returned data")


@app.command("send-raw")
def send_raw(model: str, packet: str) -> None:
    """Send a raw 64-byte packet given as hex."""
    try:
        data = bytes.fromhex(packet.replace(":", " "))
    except ValueError:
        raise typer.BadParameter("packet must be hex bytes") from None
    try:
        response = _build_service().send_raw(model, data)
    except AkkoctlError as exc:
        raise _fail(exc) from None
    typer.echo(" ".join(f"{b:02X}" for b in response))


@app.command("set-rgb")
def set_rgb(
    model: str,
    brightness: int = typer.Option(4, "--brightness", min=0, max=255, help="0-4, higher is brighter"),
    speed: int = typer.Option(2, "--speed", min=0, max=255, help="0-4, higher is faster"),
    direction: int = typer.Option(0, "--direction", min=0, max=255),
    color: str = typer.Option("ffffff", "--color", help="RRGGBB hex"),
    mode: str = typer.Option(f"0x{RGB_MODE_DAZZLE:02X}", "--mode", help="0x07 Dazzle, 0x08 Static color"),
) -> None:
    """Set lighting brightness, speed, direction, colour and mode."""
    rgb = _parse_color(color)
    mode_byte = _parse_byte(mode, "mode")
    try:
        result = _build_service().set_rgb(model, brightness, speed, direction, rgb, mode=mode_byte)
    except AkkoctlError as exc:
        raise _fail(exc) from None
    _echo_result(result)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
