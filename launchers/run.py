import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from depthfield.app.loader import config_from_settings, load_settings
from depthfield.app.loop import run_field

DEFAULT_CONFIG = ROOT / "config" / "default.yaml"


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def parse_pair(text: str | None):
    if text is None:
        return None
    a, b = map(int, text.lower().split("x"))
    return a, b


def main():
    parser = argparse.ArgumentParser(description="Depth Field installation")
    parser.add_argument("--config", default=str(DEFAULT_CONFIG), help="YAML settings file")
    parser.add_argument("--screen", help="Screen size WxH, e.g. 1280x720")
    parser.add_argument("--grid", help="Dot grid COLSxROWS, e.g. 50x50")
    parser.add_argument("--cam-index", type=int, help="OpenNI2 device index")
    parser.add_argument("--replay", help="Play back a recorded .npy depth stack instead of the Kinect")
    parser.add_argument("--threshold", type=int, help="Depth threshold (mm)")
    parser.add_argument("--seed", type=int, help="Seed for the random strengths and idle wander")
    parser.add_argument("--preview", action="store_true", default=None, help="Show the depth mask window")
    parser.add_argument("--mirror", action="store_true", default=None, help="Mirror the window horizontally")
    parser.add_argument("--debug", action="store_true", default=None,
                        help="HUD and mouse-held force sources")
    parser.add_argument("--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    setup_logging(args.verbose)

    grid = parse_pair(args.grid)
    cfg = config_from_settings(
        load_settings(args.config),
        screen_size=parse_pair(args.screen),
        grid_cols=grid[0] if grid else None,
        grid_rows=grid[1] if grid else None,
        cam_index=args.cam_index,
        replay=args.replay,
        depth_threshold=args.threshold,
        seed=args.seed,
        show_preview=args.preview,
        mirror=args.mirror,
        debug=args.debug,
    )
    run_field(cfg)


if __name__ == "__main__":
    main()
