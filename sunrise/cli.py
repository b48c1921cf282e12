"""CLI entry point for Sunrise Navigator."""

import argparse
import asyncio
import json
import logging
from dataclasses import asdict

from sunrise.clients.geocoding import GeocodingClient
from sunrise.clients.http import UpstreamUnavailable, new_http_client
from sunrise.clients.music import track_search
from sunrise.clients.news import NewsClient
from sunrise.clients.traffic import TrafficAnalyzer
from sunrise.clients.weather import WeatherClient
from sunrise.config.loader import (
    config_hash,
    get_config_value,
    load_config,
    redacted,
    save_config,
    set_config_value,
)
from sunrise.config.schema import NavigatorConfig
from sunrise.llm.quote_generator import QuoteGenerator
from sunrise.models.alarm import AlarmSettings
from sunrise.pipeline.briefing import BriefingAssembler
from sunrise.reporting.formatters import (
    format_briefing_chat,
    format_briefing_json,
    format_briefing_text,
)

DEFAULT_CONFIG = "sunrise.yaml"

FORMATTERS = {
    "text": format_briefing_text,
    "json": format_briefing_json,
    "chat": format_briefing_chat,
}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="sunrise",
        description="Smart alarm with a traffic-aware morning briefing",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # serve
    serve_p = sub.add_parser("serve", help="Run the HTTP API")
    serve_p.add_argument("--host", default=None)
    serve_p.add_argument("--port", type=int, default=None)

    # ring
    ring_p = sub.add_parser("ring", help="Simulate the alarm ringing and print the briefing")
    ring_p.add_argument("--time", required=True, help="Alarm time, HH:MM")
    ring_p.add_argument("--home", required=True)
    ring_p.add_argument("--destination", required=True)
    ring_p.add_argument("--weather-location", default="")
    ring_p.add_argument("--topic", default=None, help="Quote topic")
    ring_p.add_argument("--format", choices=sorted(FORMATTERS), default="text")

    # single providers
    traffic_p = sub.add_parser("traffic", help="Commute time and delay")
    traffic_p.add_argument("origin")
    traffic_p.add_argument("destination")
    weather_p = sub.add_parser("weather", help="Current weather")
    weather_p.add_argument("location")
    sub.add_parser("news", help="Top headlines")
    quote_p = sub.add_parser("quote", help="Motivational quote")
    quote_p.add_argument("--topic", default=None)
    music_p = sub.add_parser("music", help="Search tracks for the alarm sound")
    music_p.add_argument("query")
    validate_p = sub.add_parser("validate", help="Validate an address")
    validate_p.add_argument("address")

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config (keys masked)")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "serve":
        return _cmd_serve(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)

    try:
        return asyncio.run(_run_async(config, args))
    except UpstreamUnavailable as e:
        print(f"Error: {e}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1


async def _run_async(config: NavigatorConfig, args) -> int:
    async with new_http_client(config.http.timeout_seconds) as http:
        if args.command == "ring":
            return await _cmd_ring(config, http, args)
        elif args.command == "traffic":
            result = await TrafficAnalyzer(http, config).get_traffic_info(args.origin, args.destination)
            _print_json(asdict(result))
        elif args.command == "weather":
            _print_json(asdict(await WeatherClient(http, config).get_weather(args.location)))
        elif args.command == "news":
            _print_json([asdict(h) for h in await NewsClient(http, config).get_headlines()])
        elif args.command == "quote":
            quote = await QuoteGenerator(config).get_quote(args.topic)
            print(f'"{quote.quote}" - {quote.author}')
        elif args.command == "music":
            tracks = await track_search(http, config).search(args.query)
            _print_json([asdict(t) for t in tracks])
        elif args.command == "validate":
            _print_json(asdict(await GeocodingClient(http, config).validate_address(args.address)))
        else:
            return 1
    return 0


async def _cmd_ring(config: NavigatorConfig, http, args) -> int:
    settings = AlarmSettings(
        time=args.time,
        home=args.home,
        destination=args.destination,
        weather_location=args.weather_location,
    )
    assembler = BriefingAssembler.from_config(config, http)
    result = await assembler.ring(settings, args.topic)
    print(FORMATTERS[args.format](result))
    return 0


def _cmd_serve(config: NavigatorConfig, args) -> int:
    import uvicorn

    from sunrise.app import create_app

    uvicorn.run(
        create_app(config),
        host=args.host or config.server.host,
        port=args.port or config.server.port,
    )
    return 0


def _cmd_config(config: NavigatorConfig, args) -> int:
    if args.config_command == "show":
        data = redacted(config)
        data["config_hash"] = config_hash(config)
        print(json.dumps(data, indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = (part.strip() for part in kv.split("=", 1))
        try:
            # Re-read without the environment so exported keys never land in the file
            file_config = load_config(args.config, use_env=False)
            new_config = set_config_value(file_config, key, value)
        except (KeyError, TypeError, ValueError) as e:
            print(f"Error: {e}")
            return 1
        save_config(new_config, args.config)
        print(f"Set {key} = {get_config_value(new_config, key)} in {args.config}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))
