# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Core facilities: configuration, logging, notifications, and command routing."""
