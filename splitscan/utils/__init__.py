# This file is part of Splitscan.
#
# Licensed under MIT License.
