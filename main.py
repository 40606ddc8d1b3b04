import argparse
import logging

from api.app import start

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

def main():
    parser = argparse.ArgumentParser(description="ClawMark trust service")
    parser.add_argument('--server', action='store_true', help='Start the server')
    parser.add_argument('--host', default=None, help='Server host (defaults to HOST or 0.0.0.0)')
    parser.add_argument('--port', default=None, type=int, help='Server port (defaults to PORT or 3000)')
    args = parser.parse_args()
    if args.server:
        start(host=args.host, port=args.port)
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
