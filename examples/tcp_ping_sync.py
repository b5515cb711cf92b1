"""Example: ping/pong over a blocking syncnet connection."""

import socket
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import syncnet

PORT = 9999


def run_server():
    """Answer every "ping" with "pong"."""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server.bind(("127.0.0.1", PORT))
    server.listen(5)
    print(f"Server listening on 127.0.0.1:{PORT}")
    try:
        while True:
            client_socket, address = server.accept()
            with client_socket:
                data = client_socket.recv(4096)
                print(f"Received from {address}: {data.decode()}")
                if data == b"ping":
                    client_socket.sendall(b"pong")
    except KeyboardInterrupt:
        print("\nShutting down server...")
    finally:
        server.close()


def run_client():
    """Send a ping and print the reply."""
    handle = syncnet.connect(PORT, "127.0.0.1")
    try:
        sent = syncnet.send(handle, "ping")
        print(f"Sent {sent} bytes")
        print(f"Received: {syncnet.receive(handle)}")
    finally:
        print(f"Close status: {syncnet.close(handle)}")


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "client":
        run_client()
    else:
        run_server()
