# tuono

Server-side building blocks for a fullstack React framework, built on
Starlette. The package turns Python functions into server-rendered page routes
with a JSON data endpoint, and into API endpoints; it builds the hydration
payload sent to the client, picks the right Vite bundles in production, loads
`.env` files and logs requests.

## Installation

```
pip install tuono
```

For running the test suite:

```
pip install "tuono[test]"
pytest
```

## Project files

`tuono.config.Config.get(base_dir=None)` reads `.tuono/config/config.json`
under `base_dir` (the current directory by default):

```json
{"server": {"host": "localhost", "port": 3000}}
```

An optional `origin` key may be added to `server`. A missing file raises
`FileNotFoundError`; invalid content raises `ValueError`. Without a file,
`Config()` gives host `localhost`, no origin and port `3000`.

`tuono.manifest.load_manifest(path=None)` reads the Vite manifest (default
`out/client/.vite/manifest.json`), turns source keys into route paths
(`../src/routes/about.tsx` becomes `/about`, `../src/routes/index.tsx`
becomes `/`) and installs it for the process.

`tuono.env.load_env_vars(mode, base_dir=None, environ=None)` reads `.env`,
`.env.local`, `.env.development` or `.env.production`, and
`.env.<mode>.local`, later files overriding earlier ones. Variables present in
the environment before loading always win. It writes into `os.environ` unless
another mapping is given, and returns the variables it set.

## Writing routes

Page functions return a `tuono.response.Response`: `Props` holding the data
passed to the React page, a `Redirect` (permanent, status 308) or a `Custom`
response with a status, headers and a text body.

```python
from tuono.handlers import api, handler
from tuono.response import Props, Redirect


@handler
async def index(request):
    return Props({"subtitle": "The react fullstack framework"})


@handler
async def goat(request):
    return Redirect("/pokemons/mewtwo")


@api("GET")
async def health_check(request):
    return None


@api("POST")
async def echo(request):
    return request.body()["data"]
```

A `Handler` has two Starlette endpoints: `route` serves the rendered HTML and
`data` serves `{"data": ..., "info": {"redirect_destination": ...}}` for
client-side navigation. An `api` endpoint reads the body for POST, PUT and
PATCH, and turns the returned value into a response: strings as plain text,
dicts, lists, floats and booleans as JSON, an integer as a bare status code,
`None` as an empty 200, and a `(status, body)` tuple as the body with that
status.

Parameters after the request are filled by name from
`app.state.application_state`, which may be a mapping or an object with
attributes:

```python
@handler
async def pokemons(request, fetch):
    ...

app.state.application_state = {"fetch": my_client}
```

Inside a function, the `tuono.request.Request` gives access to `uri`,
`headers`, `params`, `location()`, `body()` for JSON bodies and `form_data()`
for `application/x-www-form-urlencoded` bodies; failures raise
`BodyParseError`, whose `kind` tells why.

Props can carry a status code and cookies:

```python
props = Props({"items": []})
props.status(404)
props.add_cookie("theme", "dark")
```

## Server-side rendering

`tuono.ssr` executes the server bundle through a renderer you install with
`set_renderer(renderer)`: a callable taking the bundle source and the
serialized payload and returning HTML. In production the bundle is read from
`out/server/prod-server.js` once per thread; without a renderer or bundle,
rendering raises `SsrError` and pages answer `500 Internal server error`. In
development the bundle `.tuono/server/dev-server.js` is read on every render;
when it or the renderer is missing, `.tuono/index.html` is served with
`[SERVER_PAYLOAD]` replaced by the payload.

## Putting an app together

```python
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import Route

from tuono.catch_all import catch_all
from tuono.config import Config, Mode, set_global_config, set_global_mode
from tuono.env import load_env_vars
from tuono.logger import LoggerMiddleware
from tuono.manifest import load_manifest

set_global_config(Config.get())
set_global_mode(Mode.PROD)
load_manifest()
load_env_vars(Mode.PROD)

app = Starlette(
    routes=[
        Route("/", index.route),
        Route("/__tuono/data/", index.data),
        Route("/api/health_check", health_check, methods=["GET"]),
        Route("/{path:path}", catch_all),
    ],
    middleware=[Middleware(LoggerMiddleware)],
)
```

`catch_all` server-renders any path without its own handler with empty data.
`LoggerMiddleware` prints `METHOD /path STATUS in Nms` for each HTTP request,
except requests under `/__tuono/data`.

## What this package does not do

It has no command and no server of its own: it does not bind a port, start an
ASGI server, serve static files from `public/` or `out/client/`, or generate
routes from a `src/routes` directory. It does not proxy the Vite development
server over HTTP or WebSocket, and it ships no JavaScript engine; rendering
needs a renderer installed with `tuono.ssr.set_renderer`. Run the Starlette
app with the ASGI server of your choice.