from typing import Iterable


def str_id_generator(prefix: str) -> Iterable[str]:
    i = 0
    while True:
        yield f"{prefix}-{i}"
        i += 1

id_generator = str_id_generator("product")
