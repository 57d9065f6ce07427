import os
import pathlib
import typing


PathLike = typing.Union[str, pathlib.Path]


class NonExistentPathError(Exception):

    def __init__(self, path: str=None):
        self._path = path

    @property
    def path(self) -> str:
        if self._path is None:
            self._path = "The requested path"
        return self._path

    def __str__(self):
        return f"{self.path} does not exist."


class ReadOnlyPath(pathlib.Path):
    """A wrapper for read-oriented paths.
    
    This class creates ``pathlib.Path`` objects intended for reading. The
    instance path is fully resolved with the user wildcard expanded, and raises
    an exception if the requested path does not exist.
    """

    def __new__(cls, *args, **kwargs):
        """Create a new path object of the appropriate type."""
        _type = (
            pathlib.WindowsPath if os.name == 'nt'
            else pathlib.PosixPath
        )
        path = _type(*args, **kwargs)
        inst = path.expanduser().resolve()
        if not inst.exists():
            raise NonExistentPathError(inst)
        return inst


def search(
    paths: typing.Iterable[typing.Optional[PathLike]],
    file: PathLike,
) -> pathlib.Path:
    """Search `paths` for `file`.
    
    Parameters
    ----------
    paths : iterable of path-like
        The paths to search, in the order given. Members that are `None` or that
        do not exist on the current file system are skipped.

    file : path-like
        The file to locate.

    Returns
    -------
    path
        The full path to the first match.

    Raises
    ------
    NonExistentPathError
        No directory in `paths` contains `file`.
    """
    for p in paths:
        if p is None:
            continue
        try:
            path = ReadOnlyPath(p)
        except NonExistentPathError:
            continue
        if path.is_dir():
            test = path / str(file)
            if test.exists():
                return test
    raise NonExistentPathError(str(file))
