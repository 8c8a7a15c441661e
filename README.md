# lowfi

The pieces of an extremely simple lofi music player: track lists, a
background downloader, MP3 decoding and playback, bookmarks, a remembered
volume, and the text-mode window the player is drawn in.

```
┌─────────────────────────────┐
│ loading                     │
│  [           ] 00:00/00:00  │
│ [s]kip    [p]ause    [q]uit │
└─────────────────────────────┘
```

## Installation

```sh
pip install lowfi
```

To run the test suite as well:

```sh
pip install "lowfi[test]"
pytest
```

## What is in the package

| Module | Contents |
| --- | --- |
| `lowfi.message` | `Message` and `MessageKind`, the requests sent to a player (next, play, pause, volume, bookmark, quit). |
| `lowfi.errors` | `LowfiError` and its subclasses `TrackError`, `BookmarkError`, `VolumeError`, `UIError`. |
| `lowfi.config` | `env(name)`, `data_dir()` and `config_dir()`. |
| `lowfi.tasks` | `Tasks`, which owns background asyncio tasks and a message queue. |
| `lowfi.audio` | `decode(data)`, `Source`, `Sink`, `MixerOutput` (pygame playback), `Waiter` and `start_waiter`. |
| `lowfi.tracks` | `format_name`, `grapheme_count`, `Queued`, `Info`, `Decoded`. |
| `lowfi.tracklist` | `TrackList`, `load(name)` and `load_all()`. |
| `lowfi.downloader` | `Progress`, `Loading`, `Downloader`, `DownloadHandle`, `start_downloader`. |
| `lowfi.bookmark` | `Bookmarks` and `bookmarks_path()`. |
| `lowfi.volume` | `PersistentVolume`, `load_volume`, `save_volume`, `volume_path()`. |
| `lowfi.ui_state` | `State`, `Update`, `UpdateKind`, `UIHandle`. |
| `lowfi.titlebar`, `lowfi.window`, `lowfi.components`, `lowfi.clock`, `lowfi.interface` | The window, its parts, and `Interface` / `run_ui` that draw it each frame. |
| `lowfi.keys` | `message_for_key(key)` and `listen(sender)`. |
| `lowfi.scrapers`, `lowfi.scrape_archive`, `lowfi.scrape_lofigirl`, `lowfi.scrape_chillhop` | Scrapers that print track lists built from public music sites. |

## Track lists

A track list is a plain text file. The first line is the base that is put
in front of every track; each following line is one track:

```
https://music.example.com/tracks/
first-song.mp3
second-song.mp3!A Custom Display Name
```

- Text after a `!` is used as the display name. Without one, the name is
  taken from the file name by `lowfi.tracks.format_name`: the extension is
  dropped, URL escapes are decoded and leading track numbers are removed
  (`"01. lofi%20track.mp3"` becomes `"lofi track"`).
- A track that contains `://` is used as is and ignores the base.
  `file://` paths are read from disk, and a leading `~` stands for your
  home directory.
- A list without a base starts with the word `noheader` instead.

```python
import random
from lowfi.tracklist import TrackList

tracks = TrackList.from_text(
    "mine",
    "https://music.example.com/tracks/\nfirst-song.mp3\nsecond-song.mp3!Custom",
)
tracks.header()                       # "https://music.example.com/tracks/"
tracks.random_path(random.Random())   # e.g. ("second-song.mp3", "Custom")
```

`await lowfi.tracklist.load(name)` reads `<name>.txt` from the data
directory (`lowfi.config.data_dir()`), or else treats `name` as a file
path. `await lowfi.tracklist.load_all()` returns every list in the data
directory except `volume.txt` and `bookmarks.txt`. No list is built in.

## Downloading and playing

`TrackList.random(client, progress, rng)` downloads a random track into a
`Queued`; `Queued.decode()` checks that the data is MPEG audio, works out
its duration and gives a `Decoded` with an `Info` and a playable `Source`.

```python
from lowfi.audio import MixerOutput, Sink
from lowfi.tracks import Queued

queued = Queued.from_download("https://music.example.com/tracks/01. song.mp3", data)
decoded = queued.decode()

sink = Sink(MixerOutput())      # Sink() with no output only keeps time
sink.volume = 0.5
sink.append(decoded.data)
```

`start_downloader(tasks, size, timeout, tracks)` keeps a buffer of
`size - 1` downloaded tracks filled in the background (`size` must be at
least 2); `DownloadHandle.track()` returns a buffered `Queued`, or a
`Loading` carrying the download `Progress`. When a track arrives after a
`Loading` was handed out, a `LOADED` message is put on the tasks' queue.
`start_waiter(tasks, sink)` puts a `NEXT` message on that queue whenever
the sink runs dry after `Waiter.notify()`.

## Bookmarks and volume

`Bookmarks.bookmark(info)` toggles a track and returns whether it is now
bookmarked; `Bookmarks.load()` and `save()` use `bookmarks.txt` in the data
directory, written in the track list format with a `noheader` first line.
`load_volume()` reads `volume.txt` from the configuration directory,
writing `100` if it is missing; `save_volume(volume)` stores a 0–1 volume
as a whole percentage.

## The interface

`Interface(params).menu(state)` returns the lines of the window for a
`State`, and `await Interface.draw(state)` writes one frame to standard
output (or the writer given) and waits for the next frame time.
`run_ui(updates, state, params)` applies `Update`s from a queue and redraws
until it receives `Update.quit()`. `Params.from_args(args)` builds the
parameters from an object with `fps`, `width`, `clock`, `minimalist` and
`borderless`; the width is `21 + 2 * min(width, 32)`. Setting
`LOWFI_DISABLE_UI=1` makes it raise `UIError`.

`message_for_key` maps keys to messages:

| Key | Message |
| --- | --- |
| `s`, `n`, `l`, `track_next` | Next track |
| `p`, space, `play`, `pause`, `play_pause` | Pause or resume |
| `stop` | Pause |
| `+`, `=`, `k`, `up`, `raise_volume` | Volume up by 10% |
| `-`, `_`, `j`, `down`, `lower_volume` | Volume down by 10% |
| `right` / `left` | Volume up / down by 1% |
| `mute_volume` | Volume down by 100% |
| `b` | Bookmark |
| `q`, `ctrl+c` | Quit |

`listen(sender)` reads standard input and puts the matching messages on
`sender`.

## Scraping

The scrapers print a track list to standard output and cache downloaded
pages under `./cache/` in the current directory:

```python
import asyncio
from lowfi import scrape_chillhop

asyncio.run(scrape_chillhop.scrape())
```

`lowfi.scrape_lofigirl.scrape()` and `lowfi.scrape_archive.scrape()` work
the same way.

## What the package does not do

There is no `lowfi` command and no ready-made player: nothing here parses
command-line options or runs the loop that takes `Message`s from the queue
and drives the sink, downloader, bookmarks and interface together. The
package also does not prepare the terminal — it does not switch to raw
mode, hide the cursor or use an alternate screen — so `listen` sees input
only as the terminal passes it on. Those parts are left to the program
that uses these modules.