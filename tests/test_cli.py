from schedule_app.cli import build_parser


def test_gui_is_the_default():
    assert build_parser().parse_args([]).command is None
    assert build_parser().parse_args(["gui"]).command == "gui"


def test_api_options():
    args = build_parser().parse_args(["api", "--host", "0.0.0.0", "--port", "9000"])
    assert (args.command, args.host, args.port) == ("api", "0.0.0.0", 9000)
