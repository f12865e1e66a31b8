from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from xorcracker.core.encoding import (
    ENCODINGS,
    base64_encode,
    decode_ciphertext,
    hex_decode,
    hex_encode,
    hex_to_base64,
)
from xorcracker.core.errors import DecodeError, NoSolutionFound
from xorcracker.core.logger import configure_logging
from xorcracker.core.padding import pkcs7_pad
from xorcracker.core.scoring import FrequencyModel
from xorcracker.core.utils import fixed_xor, repeating_key_xor
from xorcracker.xor.keysize import DEFAULT_MAX_KEYSIZE, rank_keysizes
from xorcracker.xor.repeating_key import DEFAULT_TOP_KEYSIZES, break_repeating_key_xor
from xorcracker.xor.single_byte import find_best, rank_single_byte_keys

logger = logging.getLogger(__name__)

app = typer.Typer(help="xorcracker: break single-byte and repeating-key XOR with frequency analysis.")


@app.callback()
def _init(
    ctx: typer.Context,
    corpus: Optional[Path] = typer.Option(
        None,
        "--corpus",
        envvar="XORCRACKER_CORPUS",
        exists=True,
        dir_okay=False,
        help="Reference text for the frequency model (default: bundled English sample).",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", envvar="XORCRACKER_LOG_LEVEL"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Shortcut for --log-level DEBUG."),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        envvar="XORCRACKER_LOG_FILE",
        dir_okay=False,
        help="Also write log records to this file.",
    ),
):
    try:
        configure_logging("DEBUG" if verbose else log_level, log_file=log_file)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level")
    ctx.obj = {"corpus": corpus}


def _model(ctx: typer.Context) -> FrequencyModel:
    corpus = (ctx.obj or {}).get("corpus")
    if corpus is None:
        return FrequencyModel.from_package_data()
    logger.debug("Building frequency model from %s", corpus)
    return FrequencyModel.from_file(corpus)


def _check_encoding(encoding: str) -> str:
    enc = encoding.lower().strip()
    if enc not in ENCODINGS:
        raise typer.BadParameter(f"Unknown encoding '{encoding}'. Available: {', '.join(ENCODINGS)}")
    return enc


def _read_ciphertext(value: str, from_file: bool, encoding: str) -> bytes:
    enc = _check_encoding(encoding)
    if from_file:
        path = Path(value)
        if not path.is_file():
            raise typer.BadParameter(f"No such file: {value}")
        data = path.read_bytes()
    else:
        data = value.encode("utf-8")
    try:
        return decode_ciphertext(data, enc)
    except DecodeError as e:
        raise typer.BadParameter(str(e))


def _show(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


@app.command()
def score(ctx: typer.Context, text: str):
    """Frequency score of TEXT under the reference model (higher is more plausible)."""
    typer.echo(f"{_model(ctx).score(text):.6f}")


@app.command("fixed-xor")
def fixed_xor_cmd(first: str, second: str):
    """XOR two equal-length hex buffers."""
    try:
        out = fixed_xor(hex_decode(first), hex_decode(second))
    except ValueError as e:
        raise typer.BadParameter(str(e))
    typer.echo(hex_encode(out))


@app.command()
def encrypt(
    text: str = typer.Argument(..., help="Plaintext to encrypt."),
    key: str = typer.Option(..., "--key", "-k", help="Repeating key."),
    output: str = typer.Option("hex", "--output", "-o", help="hex or base64."),
):
    """Repeating-key XOR encrypt TEXT (decrypting is the same operation)."""
    if not key:
        raise typer.BadParameter("Key must not be empty.", param_hint="--key")
    ct = repeating_key_xor(text.encode("utf-8"), key.encode("utf-8"))
    if output == "hex":
        typer.echo(hex_encode(ct))
    elif output == "base64":
        typer.echo(base64_encode(ct))
    else:
        raise typer.BadParameter("Output must be 'hex' or 'base64'.", param_hint="--output")


@app.command()
def single(
    ctx: typer.Context,
    value: str = typer.Argument(..., metavar="INPUT", help="Ciphertext, or a path with --file."),
    encoding: str = typer.Option("auto", "--encoding", "-e", help="auto, hex, base64 or raw."),
    from_file: bool = typer.Option(False, "--file", "-f", help="Treat INPUT as a file path."),
    top: int = typer.Option(1, "--top", "-t", help="Show this many candidate keys."),
    require_text: bool = typer.Option(False, "--require-text", help="Reject candidates that are not valid UTF-8."),
    as_json: bool = typer.Option(False, "--json", help="Print candidates as JSON."),
):
    """Break single-byte XOR."""
    ct = _read_ciphertext(value, from_file, encoding)
    results = rank_single_byte_keys(ct, _model(ctx), top_n=max(1, top), require_text=require_text)
    if not results:
        typer.echo("No candidate key produced readable text.", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    for i, r in enumerate(results, start=1):
        typer.echo(f"#{i}  key=0x{r.key:02x}  score={r.score:.5f}")
        typer.echo(_show(r.plaintext))


@app.command()
def detect(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="File with one hex ciphertext per line."),
    require_text: bool = typer.Option(False, "--require-text", help="Reject candidates that are not valid UTF-8."),
):
    """Find the single-byte-XOR-encrypted line in a file of hex ciphertexts."""
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise typer.BadParameter(f"{path} is not a UTF-8 text file: {e}")
    lines = [ln.strip() for ln in text.splitlines()]
    lines = [ln for ln in lines if ln]
    try:
        cts = [hex_decode(ln) for ln in lines]
    except DecodeError as e:
        raise typer.BadParameter(str(e))

    best = find_best(cts, _model(ctx), require_text=require_text)
    if best is None:
        typer.echo("No line produced readable text.", err=True)
        raise typer.Exit(code=1)

    line_no = cts.index(best.ciphertext) + 1
    typer.echo(f"line={line_no}  key=0x{best.key:02x}  score={best.score:.5f}")
    typer.echo(_show(best.plaintext))


@app.command()
def keysizes(
    value: str = typer.Argument(..., metavar="INPUT", help="Ciphertext, or a path with --file."),
    encoding: str = typer.Option("auto", "--encoding", "-e"),
    from_file: bool = typer.Option(False, "--file", "-f"),
    top: int = typer.Option(5, "--top", "-t"),
    max_len: int = typer.Option(DEFAULT_MAX_KEYSIZE, "--max-len"),
):
    """Rank likely repeating-key lengths by normalized bit distance."""
    ct = _read_ciphertext(value, from_file, encoding)
    ranked = rank_keysizes(ct, max_len=max_len)
    if not ranked:
        typer.echo("Ciphertext too short to estimate a key length.")
        raise typer.Exit(code=0)
    for c in ranked[:top]:
        typer.echo(f"  k={c.length:2d}  distance={c.distance:.4f}")


@app.command()
def crack(
    ctx: typer.Context,
    value: str = typer.Argument(..., metavar="INPUT", help="Ciphertext, or a path with --file."),
    encoding: str = typer.Option("auto", "--encoding", "-e", help="auto, hex, base64 or raw."),
    from_file: bool = typer.Option(False, "--file", "-f", help="Treat INPUT as a file path."),
    key_length: Optional[List[int]] = typer.Option(
        None,
        "--key-length",
        "-l",
        help="Known key length; skips estimation. Can repeat: -l 3 -l 5",
    ),
    top: int = typer.Option(DEFAULT_TOP_KEYSIZES, "--top", "-t", help="Estimated key lengths to try."),
    max_len: int = typer.Option(DEFAULT_MAX_KEYSIZE, "--max-len"),
    require_text: bool = typer.Option(False, "--require-text", help="Reject candidates that are not valid UTF-8."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
):
    """Break repeating-key XOR: estimate the key length, then recover the key column by column."""
    ct = _read_ciphertext(value, from_file, encoding)
    try:
        result = break_repeating_key_xor(
            ct,
            _model(ctx),
            key_lengths=key_length or None,
            top_n=top,
            max_len=max_len,
            require_text=require_text,
        )
    except NoSolutionFound as e:
        typer.echo(f"Could not break ciphertext: {e}", err=True)
        raise typer.Exit(code=1)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
        return

    typer.echo(
        f"key={_show(result.key)!r}  key_hex={result.key.hex()}  "
        f"score={result.score:.5f}  confidence={result.confidence:.2f}"
    )
    if result.low_confidence:
        typer.echo(
            f"Low confidence: only {len(ct) // len(result.key)} ciphertext bytes per key byte. "
            "Pass --key-length if the key length is known.",
            err=True,
        )
    typer.echo("-" * 60)
    typer.echo(_show(result.plaintext))


@app.command()
def pad(
    text: str,
    block_size: int = typer.Option(..., "--block-size", "-b"),
):
    """PKCS#7-pad TEXT and print the result as hex."""
    try:
        out = pkcs7_pad(text.encode("utf-8"), block_size)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--block-size")
    typer.echo(hex_encode(out))


@app.command("hex2b64")
def hex2b64(value: str):
    """Convert hex to base64."""
    try:
        typer.echo(hex_to_base64(value))
    except DecodeError as e:
        raise typer.BadParameter(str(e))


def main():
    app()


if __name__ == "__main__":
    main()
