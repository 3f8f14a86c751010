from typing import Iterable, List

from common.consts.string_const import COMMA


def check_blank(param_str) -> bool:
    """
    判断是否为空字符串
    包括：None，""，"  "

    :param param_str: the string to be checked
    :return: bool
    """
    if param_str is None:
        return True
    return param_str == "" or param_str.strip() == ""


def explode(data: str, symbol: str = COMMA) -> List[str]:
    """
    逗号分隔（默认逗号）
    """
    if not data:
        return []
    return data.split(symbol)


def implode(item_list: Iterable, symbol: str = COMMA) -> str:
    """
    Join items of a list by a specified symbol

    @param item_list:
    @param symbol:
    @return:
    """
    return symbol.join(str(item) for item in item_list)


def unique_keep_order(item_list: Iterable[str]) -> List[str]:
    """
    Drop repeated items, first occurrence wins

    ["b", "a", "b"] -> ["b", "a"]
    """
    seen = set()
    result = []
    for item in item_list:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result
