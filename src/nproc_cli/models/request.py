from pydantic import BaseModel, ConfigDict, NonNegativeInt


class Request(BaseModel):
    """What the command line asked for, as parsed from the flags."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    include_all: bool = False
    """
    Report the number of configured CPUs instead of the online ones.
    """

    include_online: bool = False
    """
    Report the number of online CPUs.
    """

    include_usable: bool = False
    """
    Report the number of CPUs the process may run on under its affinity mask.
    """

    ignore_count: NonNegativeInt | None = None
    """
    Amount to subtract from the selected count, if any.
    """

    show_help: bool = False
    """
    Print the usage summary.
    """

    show_version: bool = False
    """
    Print the program name and version.
    """

    @property
    def selects_count(self) -> bool:
        """Whether any of --all, --online or --usable was given."""
        return self.include_all or self.include_online or self.include_usable
