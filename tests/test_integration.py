import socket
import threading
import time

import pytest
import uvicorn
from fastapi import FastAPI, HTTPException, Request as FastAPIRequest
from fastapi.responses import PlainTextResponse

from rawhttp.method import Method
from rawhttp.request import Request

app = FastAPI()

ITEMS = {1: {"item_id": 1, "name": "The One Item"}}


@app.get("/")
async def read_root():
    return {"message": "Server is running"}


@app.get("/items/{item_id}")
async def get_item(item_id: int):
    if item_id not in ITEMS:
        raise HTTPException(status_code=404, detail=f"Item with ID {item_id} not found.")
    return ITEMS[item_id]


@app.post("/echo", response_class=PlainTextResponse)
async def echo(request: FastAPIRequest):
    body = await request.body()
    return PlainTextResponse(body.decode("utf-8"), headers={"X-Echo-Length": str(len(body))})


class _ThreadedServer(uvicorn.Server):
    def install_signal_handlers(self):
        pass


@pytest.fixture(scope="module")
def live_server():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]

    config = uvicorn.Config(app, host="127.0.0.1", port=port, log_level="warning")
    server = _ThreadedServer(config)
    thread = threading.Thread(target=server.run, kwargs={"sockets": [sock]}, daemon=True)
    thread.start()

    deadline = time.monotonic() + 10
    while not server.started:
        if time.monotonic() > deadline:
            pytest.fail("uvicorn did not start")
        time.sleep(0.01)

    yield port

    server.should_exit = True
    thread.join(timeout=5)
    sock.close()


def test_get_root(live_server):
    req = Request(Method.GET, "127.0.0.1", live_server, "/")
    req.set_body("")
    res = req.perform()

    assert res.read_status_code() == 200
    assert res.read_headers()["content-type"] == "application/json"
    assert res.read_body_string() == '{"message":"Server is running"}'


def test_get_missing_item(live_server):
    req = Request(Method.GET, "127.0.0.1", live_server, "/items/999")
    req.set_body("")
    res = req.perform()

    assert res.read_status_code() == 404
    assert res.read_body_string() == '{"detail":"Item with ID 999 not found."}'


def test_post_body_round_trips(live_server):
    body = "hello from rawhttp"
    req = Request(Method.POST, "127.0.0.1", live_server, "/echo")
    req.set_header("Content-Type", "text/plain")
    req.set_header("Content-Length", str(len(body)))
    req.set_body(body)

    res = req.perform()

    assert res.read_status_code() == 200
    assert res.read_headers()["x-echo-length"] == str(len(body))
    assert res.read_body_string() == body


def test_unknown_method_route(live_server):
    req = Request(Method.DELETE, "127.0.0.1", live_server, "/")
    req.set_body("")
    res = req.perform()

    assert res.read_status_code() == 405
