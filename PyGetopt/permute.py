"""
permute.py
in-place rotation of a run of operands past the options that follow it.
"""
import logging
from math import gcd
from typing import List

logger = logging.getLogger(__name__)

def permute_args(args: List[str], start: int, middle: int, end: int) -> None:
    """Move args[start:middle] behind args[middle:end], keeping each run's order.

    The rotation is split into gcd(nonopts, opts) independent cycles, each
    walked with swaps against its anchor, so no element is copied out.
    """
    if not 0 <= start <= middle <= end <= len(args):
        raise ValueError(f"bad permutation bounds {start}, {middle}, {end} for {len(args)} arguments")

    nnonopts = middle - start
    nopts = end - middle
    if nnonopts == 0 or nopts == 0:
        return

    ncycle = gcd(nnonopts, nopts)
    cyclelen = (end - start) // ncycle

    for i in range(ncycle):
        cstart = middle + i
        pos = cstart
        for _ in range(cyclelen):
            if pos >= middle:
                pos -= nnonopts
            else:
                pos += nopts
            args[pos], args[cstart] = args[cstart], args[pos]

    logger.debug("moved %d operand(s) behind %d option token(s) at %d", nnonopts, nopts, start)
