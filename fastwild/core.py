"""
Core Module for fastwild

This module lists a directory tree after applying wildcard filter rules. It scans the
directory structure, drops every file and directory excluded by the rules collected by
FilterScanner, and produces either a plain text tree view (with an optional flat list of
the kept files) or a JSON representation of the same data.

The module is divided into three sections:

1. Text-based Output Functions:
   - build_tree: Recursively builds a visual tree (list of strings) of the directory structure.
   - generate_folder_structure: Generates the complete folder structure as a text string.

2. JSON-based Output Functions:
   - build_tree_data: Constructs a nested dictionary representing the directory tree.
   - collect_paths: Gathers the relative paths of all kept files.

3. Public API:
   - generate_listing: Combines the above functions into the final listing, either in
     plain text or JSON format.
"""

import os
import json
from typing import Optional, List, Dict, Union
from .filter_logic import FilterScanner, DEFAULT_FILTER_FILE


def make_scanner(root_dir: str, casefold: bool, filter_file: str = DEFAULT_FILTER_FILE,
                 extra_patterns: Optional[List[str]] = None) -> FilterScanner:
    """
    Creates a FilterScanner with the rules from every filter file under root_dir,
    followed by any extra rules (which therefore take precedence).
    """
    scanner = FilterScanner(root_dir, casefold=casefold, filter_file=filter_file)
    scanner.load_patterns()
    if extra_patterns:
        scanner.add_patterns(extra_patterns)
    return scanner


def _list_dir(full_path: str) -> List[str]:
    # Sorted entries of a directory, without '.git'.
    return sorted(x for x in os.listdir(full_path) if x != '.git')

###############################################################################
# Text-based output functions
###############################################################################

def build_tree(root_dir: str, prefix: str = "", scanner: Optional[FilterScanner] = None, parent_path: str = "") -> List[str]:
    """
    Recursively builds a list of strings representing the folder structure in text form.

    Parameters:
        root_dir (str): The base directory to list.
        prefix (str): The current indentation/prefix string used to draw the tree.
        scanner (Optional[FilterScanner]): The scanner holding the filter rules. If None, one is
            created from the filter files under root_dir.
        parent_path (str): The relative path from root_dir to the directory being processed.

    Returns:
        List[str]: One string per line of the visual directory tree.
    """
    if scanner is None:
        scanner = make_scanner(root_dir, casefold=False)

    full_path = os.path.join(root_dir, parent_path)
    try:
        items = [(name, os.path.isdir(os.path.join(full_path, name))) for name in _list_dir(full_path)]
    except PermissionError:
        # Unreadable directories are left out of the tree.
        return []

    filtered = []
    for name, is_dir in items:
        rel_path = f"{parent_path}/{name}" if parent_path else name
        if scanner.should_exclude(rel_path, is_dir):
            continue
        filtered.append((name, is_dir))

    lines = []
    for i, (name, is_dir) in enumerate(filtered):
        last = i == len(filtered) - 1
        connector = "└── " if last else "├── "
        lines.append(f"{prefix}{connector}{name}{'/' if is_dir else ''}")
        if is_dir:
            ext = "    " if last else "│   "
            child = f"{parent_path}/{name}" if parent_path else name
            lines += build_tree(root_dir, prefix + ext, scanner, child)
    return lines


def generate_folder_structure(root_dir: str, scanner: FilterScanner, display_actual_root: bool = True) -> str:
    """
    Generates a string representing the filtered folder structure.

    Parameters:
        root_dir (str): The directory to list.
        scanner (FilterScanner): The scanner holding the filter rules.
        display_actual_root (bool): If True, the root node shows the folder name; if False, '.'.

    Returns:
        str: The complete folder structure as a text string.
    """
    if display_actual_root:
        base = os.path.basename(os.path.abspath(root_dir))
    else:
        base = "."
    lines = [f"{base}/"]
    lines += build_tree(root_dir, scanner=scanner)
    return '\n'.join(lines)

###############################################################################
# JSON-based output functions
###############################################################################

def build_tree_data(root_dir: str, scanner: FilterScanner, parent_path: str = "") -> Dict[str, Union[str, list]]:
    """
    Constructs a nested dictionary representing the filtered directory structure.

    Directories are dictionaries with a "name" key and a "children" key holding a list of
    sub-items. Files are dictionaries with just a "name" key.
    """
    full_path = os.path.join(root_dir, parent_path)
    if parent_path == "":
        name = os.path.basename(os.path.abspath(root_dir))
    else:
        name = os.path.basename(parent_path)

    if not os.path.isdir(full_path):
        return {"name": name}

    node = {"name": name, "children": []}
    try:
        entries = _list_dir(full_path)
    except PermissionError:
        return node
    for nm in entries:
        is_dir = os.path.isdir(os.path.join(full_path, nm))
        rel_path = f"{parent_path}/{nm}" if parent_path else nm
        if scanner.should_exclude(rel_path, is_dir):
            continue
        if is_dir:
            node["children"].append(build_tree_data(root_dir, scanner, rel_path))
        else:
            node["children"].append({"name": nm})
    return node


def collect_paths(root_dir: str, scanner: FilterScanner) -> List[str]:
    """
    Returns the sorted relative paths ('/'-separated) of every file that is not excluded.

    Excluded directories are not descended into, and filter files themselves are left out.
    """
    paths = []
    for dirpath, dirnames, filenames in os.walk(root_dir):
        if '.git' in dirnames:
            dirnames.remove('.git')
        rel_dir = os.path.relpath(dirpath, root_dir)
        if rel_dir == '.':
            rel_dir = ''
        rel_dir = rel_dir.replace(os.sep, '/')
        dirnames[:] = [d for d in dirnames
                       if not scanner.should_exclude(f"{rel_dir}/{d}" if rel_dir else d, True)]
        for filename in filenames:
            if filename == scanner.filter_file:
                continue
            rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
            if scanner.should_exclude(rel_path, False):
                continue
            paths.append(rel_path)
    return sorted(paths)

###############################################################################
# Public API: generate_listing
###############################################################################

def generate_listing(root_dir: str, casefold: bool, json_mode: bool = False, only_structure: bool = False,
                     display_actual_root: bool = True, filter_file: str = DEFAULT_FILTER_FILE,
                     extra_patterns: Optional[List[str]] = None) -> str:
    """
    Generates the filtered listing of a directory.

    Parameters:
        root_dir (str): The root directory to scan.
        casefold (bool): If True, filter rules are matched case-insensitively.
        json_mode (bool): If True, output is formatted as JSON; otherwise, plain text is returned.
        only_structure (bool): If True, only the folder structure is included (file list omitted).
        display_actual_root (bool): If True, the root node displays the actual folder name; if False, '.'.
        filter_file (str): Name of the per-directory files holding filter rules.
        extra_patterns (Optional[List[str]]): Rules applied after those from filter files.

    Returns:
        str: The listing as plain text or as a JSON-formatted string.
    """
    scanner = make_scanner(root_dir, casefold, filter_file, extra_patterns)
    if not json_mode:
        structure = generate_folder_structure(root_dir, scanner, display_actual_root)
        if only_structure:
            return f"Project Structure:\n\n{structure}\n"
        files = '\n'.join(collect_paths(root_dir, scanner))
        return f"Project Structure:\n\n{structure}\n\nFiles:\n\n{files}\n"

    tree_data = build_tree_data(root_dir, scanner, parent_path="")
    tree_data["name"] = os.path.basename(os.path.abspath(root_dir)) if display_actual_root else "."
    result = {"structure": tree_data}
    if not only_structure:
        result["files"] = collect_paths(root_dir, scanner)
    return json.dumps(result, indent=2)
