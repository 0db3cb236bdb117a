#!/usr/bin/env python3
"""
FairPlay Engine - Command Line

Usage:
    python -m tools.fairplay_cli seed --public-seed lucky-7
    python -m tools.fairplay_cli play dice --param target=50 --rounds 5
    python -m tools.fairplay_cli verify --secret <hex> --public lucky-7 --nonce 3 --game dice
    python -m tools.fairplay_cli simulate plinko --param rows=16 --param risk=high
    python -m tools.fairplay_cli autobet dice --stake 1 --on-loss 100 --rounds 20
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.game_schema import AutobetSettings
from config.settings import FairPlayConfig
from fairplay.autobet import AutobetController
from fairplay.errors import FairPlayError
from fairplay.games import GAME_TYPES
from fairplay.rng import digest, rng_float
from fairplay.seeds import SeedManager, commitment_hash
from fairplay.simulate import simulate
from fairplay.table import GameTable
from fairplay.verify import replay_round
from fairplay.wallet import Wallet

console = Console()


def _parse_params(pairs: list) -> dict:
    """key=value pairs → dict; values parsed as JSON when possible."""
    params = {}
    for item in pairs or []:
        key, _, raw = item.partition("=")
        try:
            params[key] = json.loads(raw)
        except json.JSONDecodeError:
            params[key] = raw
    return params


def cmd_seed(args):
    seeds = SeedManager.create(args.public_seed)
    console.print(Panel(
        f"[bold]Commitment[/bold]  {seeds.active_commitment}\n"
        f"[bold]Public seed[/bold] {seeds.public_seed}\n"
        f"[bold]Nonce[/bold]       {seeds.nonce}",
        title="New seed pair",
    ))
    if args.reveal:
        console.print(f"[dim]Secret (keep private until rotation): {seeds.pair.secret_seed}[/dim]")


def cmd_play(args):
    seeds = SeedManager.create(args.public_seed)
    table = GameTable(seeds, Wallet(args.balance))
    params = _parse_params(args.param)

    grid = Table(title=f"{args.game} - commitment {seeds.active_commitment[:16]}…")
    grid.add_column("nonce", justify="right")
    grid.add_column("result")
    grid.add_column("mult", justify="right")
    grid.add_column("payout", justify="right")
    grid.add_column("balance", justify="right")
    for _ in range(args.rounds):
        rec = table.play(args.game, params, stake=args.stake)
        grid.add_row(str(rec.nonce), json.dumps(rec.result)[:60],
                     f"{rec.multiplier:.4f}", f"{rec.payout:.2f}",
                     f"{table.wallet.balance:.2f}")
    console.print(grid)

    entry = seeds.rotate()
    console.print(f"[dim]Revealed secret: {entry.secret_seed}[/dim]")


def cmd_verify(args):
    ok = True
    if args.commitment:
        ok = commitment_hash(args.secret) == args.commitment.lower()
        console.print(f"Commitment: {'[green]PASS[/green]' if ok else '[red]FAIL[/red]'}")
    r = rng_float(args.secret, args.public, args.nonce, args.index)
    console.print(f"digest = {digest(args.secret, args.public, args.nonce, args.index)}")
    console.print(f"float  = {r:.10f}")
    if args.game:
        outcome = replay_round(args.secret, args.public, args.nonce, args.game,
                               _parse_params(args.param))
        console.print_json(json.dumps(outcome.to_dict()))
    return 0 if ok else 1


def cmd_simulate(args):
    res = simulate(args.game, _parse_params(args.param), rounds=args.rounds, seed=args.seed)
    d = res.to_dict()
    console.print(Panel(
        f"Rounds: {res.rounds:,}\n"
        f"RTP theoretical: {d['rtp_theoretical']:.4%}\n"
        f"RTP measured:    {d['rtp_measured']:.4%}  "
        f"(95% CI {d['confidence_95'][0]:.4f}-{d['confidence_95'][1]:.4f})\n"
        f"Hit rate: {d['hit_rate']:.2%}   Max: {d['max_multiplier_hit']}x",
        title=f"Monte Carlo - {res.game_type}",
    ))
    dist = Table("bucket", "share")
    for k, v in d["distribution"].items():
        dist.add_row(k, f"{v:.2%}")
    console.print(dist)


def cmd_autobet(args):
    seeds = SeedManager.create(args.public_seed)
    table = GameTable(seeds, Wallet(args.balance))
    params = _parse_params(args.param)
    ctl = AutobetController()
    ctl.start(AutobetSettings(
        stake_base=args.stake, on_win_pct=args.on_win, on_loss_pct=args.on_loss,
        rounds_target=args.rounds, profit_target=args.stop_profit, loss_limit=args.stop_loss,
    ))

    def play_round(stake):
        rec = table.play(args.game, params, stake=stake)
        return rec.won, rec.payout

    snap = ctl.run(play_round, lambda: table.wallet.balance, max_rounds=args.max_rounds)
    console.print(Panel(
        f"State: [bold]{snap.state}[/bold] ({snap.stop_reason or 'max rounds'})\n"
        f"Rounds: {snap.rounds_done}\n"
        f"Profit: {snap.cumulative_profit:+.2f}\n"
        f"Next stake: {snap.stake_current:.2f}\n"
        f"Balance: {table.wallet.balance:.2f}",
        title=f"Autobet - {args.game}",
    ))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Provably fair outcome engine")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("seed", help="Create a seed pair and show its commitment")
    p.add_argument("--public-seed", default=None)
    p.add_argument("--reveal", action="store_true")
    p.set_defaults(func=cmd_seed)

    p = sub.add_parser("play", help="Play rounds against a throwaway wallet")
    p.add_argument("game", choices=GAME_TYPES)
    p.add_argument("--param", action="append", help="key=value game parameter")
    p.add_argument("--stake", type=float, default=1.0)
    p.add_argument("--rounds", type=int, default=1)
    p.add_argument("--balance", type=float, default=100.0)
    p.add_argument("--public-seed", default=None)
    p.set_defaults(func=cmd_play)

    p = sub.add_parser("verify", help="Recompute a round from revealed seeds")
    p.add_argument("--secret", required=True)
    p.add_argument("--public", required=True)
    p.add_argument("--nonce", type=int, required=True)
    p.add_argument("--index", type=int, default=0)
    p.add_argument("--commitment", default=None)
    p.add_argument("--game", choices=GAME_TYPES, default=None)
    p.add_argument("--param", action="append")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("simulate", help="Monte-Carlo RTP of a game configuration")
    p.add_argument("game", choices=GAME_TYPES)
    p.add_argument("--param", action="append")
    p.add_argument("--rounds", type=int, default=100_000)
    p.add_argument("--seed", type=int, default=42)
    p.set_defaults(func=cmd_simulate)

    p = sub.add_parser("autobet", help="Run an autobet session")
    p.add_argument("game", choices=GAME_TYPES)
    p.add_argument("--param", action="append")
    p.add_argument("--stake", type=float, default=1.0)
    p.add_argument("--on-win", type=float, default=0.0)
    p.add_argument("--on-loss", type=float, default=0.0)
    p.add_argument("--rounds", type=int, default=0)
    p.add_argument("--stop-profit", type=float, default=0.0)
    p.add_argument("--stop-loss", type=float, default=0.0)
    p.add_argument("--max-rounds", type=int, default=10_000)
    p.add_argument("--balance", type=float, default=100.0)
    p.add_argument("--public-seed", default=None)
    p.set_defaults(func=cmd_autobet)

    args = parser.parse_args(argv)
    FairPlayConfig.configure_logging(args.log_level)
    try:
        return args.func(args) or 0
    except (FairPlayError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
