import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def point_at(errmsg: str, code: str, error_char_idx: int) -> str:
    print_start_idx = max(0, error_char_idx - 10)
    print_ellipsis_pre = print_start_idx > 0
    print_end_idx = min(len(code), error_char_idx + 10)
    print_ellipsis_post = print_end_idx < len(code)
    return "\n".join(
        [
            errmsg,
            (
                ("..." if print_ellipsis_pre else "")
                + f"{code[print_start_idx:print_end_idx]}"
                + ("..." if print_ellipsis_post else "")
            ),
            " " * (error_char_idx - print_start_idx + (3 if print_ellipsis_pre else 0)) + "^",
        ]
    )
