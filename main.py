"""
Brightness explorer entry point (run from repo root after `pip install -e .`):

  python main.py                          # chart normalized to f/2.8
  python main.py --fstop 4 --crop --crop_factor 1.6
  python main.py --image photo.jpg --ev 1.5 --outdir results

See fstop_explorer/cli.py for all flags.
"""

from fstop_explorer.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
