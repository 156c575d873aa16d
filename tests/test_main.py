import main


def test_parse_args_defaults():
    args = main.parse_args([])
    assert args.pdf is None
    assert args.endpoint is None
    assert args.scale is None


def test_parse_args_overrides():
    args = main.parse_args(["paper.pdf", "--endpoint", "http://localhost:9000/predict/",
                            "--scale", "2", "--log-level", "debug"])
    assert args.pdf == "paper.pdf"
    assert args.endpoint == "http://localhost:9000/predict/"
    assert args.scale == 2.0
    assert args.log_level == "debug"
