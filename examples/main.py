"""
main.py — Run your RPS Lobby server
===================================

Edit the configuration below, then:

    python main.py

Clients connect to ws://<host>:<port>/ws. The first frame creates a
game (that connection becomes its controller) or joins one.

Press Ctrl+C to stop.
"""

from rps_lobby._shared import setup_logging
from rps_lobby._server_config import load_config, validate_config
from rps_lobby.server import run_server

# ── Configuration ──
config = load_config()          # defaults + RPS_* environment variables
config.update({
    "host": "0.0.0.0",
    "port": 8080,
    "log_file": "lobby.log",
})
validate_config(config)

# ── Setup logging (so you can see what's happening) ──
setup_logging(log_file_path=config["log_file"], level=config["log_level"])

# ── Run ──
run_server(config)
