"""
Playbook CLI
------------
Run the analytics pipeline over a CSV of one-minute bars.

    playbook data/nifty_1m.csv --period 9 --smoothing ema
    playbook data/nifty_1m.csv --json
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from playbook.analytics.indicators.smoothing import SmoothingMethod
from playbook.config.settings import load_default_rsi_settings
from playbook.data.csv_loader import load_bars_csv
from playbook.errors import PlaybookError
from playbook.facade.analytics_facade import AnalyticsFacade, PlaybookView
from playbook.logging.logger import setup_logger
from playbook.utils.market_session import MarketSession

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="playbook",
        description="Opening range levels and RSI confluence for intraday bars",
    )
    parser.add_argument("bars", help="CSV file with time, open, high, low, close, volume columns")
    parser.add_argument("--period", type=int, help="RSI lookback period (2-100)")
    parser.add_argument("--overbought", type=float, help="Overbought threshold (50-95)")
    parser.add_argument("--oversold", type=float, help="Oversold threshold (5-50)")
    parser.add_argument(
        "--smoothing",
        choices=[method.value for method in SmoothingMethod],
        help="RSI smoothing model",
    )
    parser.add_argument("--json", action="store_true", help="Print the full view as JSON")
    parser.add_argument("--log-level", default=None, help="Logging level (default from PLAYBOOK_LOG_LEVEL)")
    return parser


def render_view(view: PlaybookView) -> str:
    lines = []
    if view.market is not None:
        sign = "+" if view.market.change >= 0 else ""
        lines.append(
            f"{view.symbol}  last {view.market.last:.2f}  "
            f"{sign}{view.market.change:.2f} ({sign}{view.market.change_percent:.2f}%)"
        )

    opening = view.opening_range
    lines.append(
        f"Opening range {MarketSession.format_clock(opening.start)} - {MarketSession.format_clock(opening.end)}"
        f"  H {opening.high:.2f}  L {opening.low:.2f}"
    )
    lines.append("Resistances  " + "  ".join(
        f"A{index + 1} {level:.2f}" for index, level in enumerate(view.levels.resistances)
    ))
    lines.append("Supports     " + "  ".join(
        f"B{index + 1} {level:.2f}" for index, level in enumerate(view.levels.supports)
    ))

    settings = view.settings
    rsi_text = "-" if view.latest_rsi is None else f"{view.latest_rsi:.2f}"
    lines.append(
        f"RSI {rsi_text}  ({settings.smoothing.label}, period {settings.period}, "
        f"{len(view.rsi_series)} datapoints, OB {settings.overbought:g} / OS {settings.oversold:g})"
    )

    lines.append(f"Conviction {view.report.confidence:.0f}%  {view.report.bias.value.upper()}")
    if not view.report.insights:
        lines.append("  Waiting for sufficient data to generate actionable intelligence.")
    for insight in view.report.insights:
        lines.append(f"  [{insight.severity.value.upper()}] {insight.title}")
        lines.append(f"      {insight.detail}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger("playbook", level=args.log_level, file=False)

    try:
        settings = load_default_rsi_settings().with_changes(**{
            key: value
            for key, value in (
                ("period", args.period),
                ("overbought", args.overbought),
                ("oversold", args.oversold),
                ("smoothing", args.smoothing),
            )
            if value is not None
        })
        facade = AnalyticsFacade(settings=settings)
        view = facade.load_bars(load_bars_csv(args.bars))
    except PlaybookError as e:
        logger.error(f"Playbook run failed: {e}")
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(view.to_dict(), indent=2))
    else:
        print(render_view(view))
    return 0


if __name__ == "__main__":
    sys.exit(main())
