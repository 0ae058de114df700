import sys
import os

# autodoc imports the package from the repository root
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

project = 'starpr'
author = 'starpr contributors'

with open(os.path.join(os.path.dirname(__file__), '..', 'VERSION')) as f:
    release = f.read().strip()
version = release

extensions = [
    'sphinx.ext.autodoc',
    'recommonmark',
]

autodoc_member_order = 'bysource'

source_suffix = {
    '.rst': 'restructuredtext',
    '.md': 'markdown',
}

master_doc = 'index'

exclude_patterns = ['_build']

html_theme = 'sphinxdoc'
