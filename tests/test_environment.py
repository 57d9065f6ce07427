import pathlib

import pytest

import unitschema


@pytest.fixture
def isolated(tmp_path: pathlib.Path, monkeypatch):
    """An empty working directory and home directory."""
    workdir = tmp_path / 'work'
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv('HOME', str(workdir))
    monkeypatch.delenv('UNITSCHEMA_INI', raising=False)
    return workdir


def test_default_settings(isolated):
    """Read the settings shipped with the package."""
    env = unitschema.Environment('schema')
    package = pathlib.Path(unitschema.__file__).parent.resolve()
    assert env.path == package / 'unitschema.ini'
    assert env.getboolean('strict') is False
    assert env['style'] == ''
    assert set(env) == {'strict', 'style'}
    assert len(env) == 2
    with pytest.raises(KeyError):
        env['missing']
    with pytest.raises(KeyError):
        unitschema.Environment('missing')


def test_local_settings(isolated):
    """Settings in the working directory take precedence."""
    path = isolated / 'unitschema.ini'
    path.write_text("[schema]\nstrict = yes\nstyle = tex\n")
    env = unitschema.Environment('schema')
    assert env.path == path.resolve()
    assert env.getboolean('strict') is True
    assert env['style'] == 'tex'
    assert '"strict": "yes"' in str(env)


def test_environment_variable(isolated, tmp_path, monkeypatch):
    """Find settings in the directory named by an environment variable."""
    config = tmp_path / 'config'
    config.mkdir()
    (config / 'unitschema.ini').write_text("[schema]\nstrict = true\n")
    monkeypatch.setenv('UNITSCHEMA_INI', str(config))
    env = unitschema.Environment('schema')
    assert env.path == config.resolve() / 'unitschema.ini'
    assert env.getboolean('strict') is True
    with pytest.raises(KeyError):
        env['style']
