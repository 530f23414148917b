# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Compact binary serialization: variable-length integers for length prefixes and data types to encode and decode
typed binary records (numbers, text, byte runs, sequences, records and dataclasses).

The main entry point is `binlayout.data_types.make_data_type`.
"""

from binlayout.version import __version__

__all__ = ['__version__']
