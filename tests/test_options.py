from pathlib import Path

import pytest

from stargazed.options import Options, OptionsError, check_required, load_config_file, validate_options


def test_long_and_short_aliases() -> None:
    opts = validate_options({"u": "octocat", "token": "abc", "r": "stars", "m": "msg", "s": True})
    assert opts == Options(username="octocat", token="abc", repo="stars", message="msg", sort=True)


def test_long_alias_wins_over_short() -> None:
    opts = validate_options({"username": "long", "u": "short"})
    assert opts.username == "long"


def test_unknown_keys_are_ignored() -> None:
    opts = validate_options({"username": "octocat", "colour": 3})
    assert opts == Options(username="octocat")


def test_empty_mapping_gives_defaults() -> None:
    opts = validate_options({})
    assert opts.username is None
    assert opts.sort is False and opts.version is False and opts.help is False


@pytest.mark.parametrize(
    "raw, field",
    [
        ({"username": 42}, "Username"),
        ({"t": ["x"]}, "Token"),
        ({"repo": None}, "Repo name"),
        ({"m": 1.5}, "Commit message"),
        ({"sort": "yes"}, "Sort option"),
        ({"v": 1}, "Version option"),
        ({"help": 0}, "Help option"),
    ],
)
def test_wrong_type_names_the_field(raw: dict, field: str) -> None:
    with pytest.raises(OptionsError, match=field):
        validate_options(raw)


def test_non_mapping_is_rejected() -> None:
    with pytest.raises(OptionsError, match="mapping"):
        validate_options(["username", "octocat"])


def test_options_are_immutable() -> None:
    opts = validate_options({"username": "octocat"})
    with pytest.raises(AttributeError):
        opts.username = "other"  # type: ignore[misc]


def test_check_required_username() -> None:
    with pytest.raises(OptionsError, match="username is a required field"):
        check_required(Options(token="abc"))
    with pytest.raises(OptionsError, match="username is a required field"):
        check_required(Options(username=""))


def test_check_required_repo_needs_token() -> None:
    with pytest.raises(OptionsError, match="needs a token"):
        check_required(Options(username="octocat", repo="stars"))
    check_required(Options(username="octocat", repo="stars", token="abc"))
    check_required(Options(username="octocat"))


def test_load_config_file(tmp_path: Path) -> None:
    cfg = tmp_path / "stargazed.yml"
    cfg.write_text("username: octocat\ns: false\n", encoding="utf-8")
    assert load_config_file(cfg) == {"username": "octocat", "s": False}


def test_load_config_file_empty(tmp_path: Path) -> None:
    cfg = tmp_path / "empty.yml"
    cfg.write_text("", encoding="utf-8")
    assert load_config_file(cfg) == {}


def test_load_config_file_errors(tmp_path: Path) -> None:
    with pytest.raises(OptionsError, match="does not exist"):
        load_config_file(tmp_path / "missing.yml")

    not_mapping = tmp_path / "list.yml"
    not_mapping.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(OptionsError, match="mapping"):
        load_config_file(not_mapping)

    broken = tmp_path / "broken.yml"
    broken.write_text("username: [octocat\n", encoding="utf-8")
    with pytest.raises(OptionsError, match="not valid YAML"):
        load_config_file(broken)
