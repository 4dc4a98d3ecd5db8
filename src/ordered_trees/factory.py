# -*- coding: utf-8 -*-
# ------------------------------------------------------------------------------
#
#   Copyright 2025 Jannik Hehemann
#
#   Licensed under the Apache License, Version 2.0 (the "License");
#   you may not use this file except in compliance with the License.
#   You may obtain a copy of the License at
#
#       http://www.apache.org/licenses/LICENSE-2.0
#
#   Unless required by applicable law or agreed to in writing, software
#   distributed under the License is distributed on an "AS IS" BASIS,
#   WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#   See the License for the specific language governing permissions and
#   limitations under the License.
#
# ------------------------------------------------------------------------------

"""Factory for key-type specialised binary search tree classes"""

from typing import Dict, Optional, Tuple, Type
import logging

from ordered_trees.bst_base import BSTBase, BSTNodeBase

# Configure logging
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)

# Cache for previously created classes to avoid recreating them
_class_cache: Dict[Optional[type], Tuple[Type[BSTBase], Type[BSTNodeBase]]] = {}


def _type_label(key_type: Optional[type]) -> str:
    return "Any" if key_type is None else key_type.__name__


def make_bst_classes(key_type: Optional[type] = None) -> Tuple[
    Type[BSTBase],
    Type[BSTNodeBase]
]:
    """
    Factory function to generate tree and node classes that accept only keys of key_type.

    Args:
        key_type: The class every key must be an instance of. None accepts
            any keys that compare with each other.

    Returns:
        BSTK     – subclass of BSTBase with KEY_TYPE=key_type and NodeClass=BSTNodeK.
        BSTNodeK – subclass of BSTNodeBase.

    Raises:
        TypeError: If key_type is neither None nor a class.
    """
    if key_type is not None and not isinstance(key_type, type):
        raise TypeError(f"key_type must be a class or None, got {key_type!r}")

    if key_type in _class_cache:
        logger.debug(f"Using cached classes for key_type={_type_label(key_type)}")
        return _class_cache[key_type]

    label = _type_label(key_type)
    logger.debug(f"Creating new classes for key_type={label}")

    BSTNodeK = type(
        f"BSTNode_{label}",
        (BSTNodeBase,),
        {"__slots__": ()}
    )

    BSTK = type(
        f"BST_{label}",
        (BSTBase,),
        {
            "NodeClass": BSTNodeK,
            "KEY_TYPE": key_type,
            "__slots__": ()
        }
    )
    logger.debug(f"Created {BSTK.__name__} with NodeClass={BSTNodeK.__name__}")

    _class_cache[key_type] = (BSTK, BSTNodeK)
    return BSTK, BSTNodeK


def create_bst(key_type: Optional[type] = None) -> BSTBase:
    """
    Create a new empty tree.

    Args:
        key_type: Optional class restricting the accepted keys.

    Returns:
        An empty tree of the class specialised for key_type.
    """
    BSTK, _ = make_bst_classes(key_type)
    tree = BSTK()
    logger.debug(f"Created tree instance of type {type(tree).__name__}")
    return tree
