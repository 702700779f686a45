"""Rolling hashes over fixed-length byte windows.

Rolling hashes maintain the hash of the last n bytes of a stream and are
used to track the positions of n-byte sequences in a dictionary buffer.
Two variants are provided: a Rabin-Karp hash and a cyclic polynomial
hash. Both work with the hashes function.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

_MASK64 = 0xFFFFFFFFFFFFFFFF

DEFAULT_A = 0x97B548ADD41D5DA1
"""Default multiplier for the Rabin-Karp hash; a random prime."""


@runtime_checkable
class Roller(Protocol):
    """A rolling hash over a window of len(roller) bytes.

    The hash value becomes valid once roll_byte has been called len(roller)
    times.
    """

    def __len__(self) -> int: ...

    def roll_byte(self, x: int) -> int: ...


def _ror(x: int, s: int) -> int:
    """Rotate the 64-bit value x right by s bits (0 <= s < 64)."""
    return ((x >> s) | (x << (64 - s))) & _MASK64


class CyclicPoly:
    """Cyclic polynomial rolling hash."""

    def __init__(self, n: int) -> None:
        if n < 1:
            raise ValueError("argument n must be positive")
        self._n = n
        self._h = 0
        self._window: list[int] = []
        self._pos = 0

    def __len__(self) -> int:
        return self._n

    def roll_byte(self, x: int) -> int:
        """Hash the next byte and return the current hash value."""
        y = _BYTE_HASH[x]
        if len(self._window) < self._n:
            self._h = _ror(self._h, 1) ^ y
            self._window.append(y)
        else:
            self._h ^= _ror(self._window[self._pos], (self._n - 1) % 64)
            self._h = _ror(self._h, 1) ^ y
            self._window[self._pos] = y
            self._pos = (self._pos + 1) % self._n
        return self._h


class RabinKarp:
    """Rabin-Karp rolling hash with arithmetic modulo 2**64."""

    def __init__(self, n: int, a: int = DEFAULT_A) -> None:
        if n <= 0:
            raise ValueError("number of bytes n must be positive")
        self.a = a & _MASK64
        self._a_oldest = pow(self.a, n, 1 << 64)
        self._n = n
        self._h = 0
        self._window: list[int] = []
        self._pos = 0

    def __len__(self) -> int:
        return self._n

    def roll_byte(self, x: int) -> int:
        """Hash the next byte and return the current hash value."""
        if len(self._window) < self._n:
            self._h = ((self._h + x) * self.a) & _MASK64
            self._window.append(x)
        else:
            h = self._h - self._window[self._pos] * self._a_oldest
            self._h = ((h + x) * self.a) & _MASK64
            self._window[self._pos] = x
            self._pos = (self._pos + 1) % self._n
        return self._h


def hashes(roller: Roller, data: bytes) -> list[int]:
    """Return the hash of every window of len(roller) bytes in data.

    The state of the roller is changed. If data is shorter than the window
    an empty list is returned.
    """
    n = len(roller)
    if len(data) < n:
        return []
    for b in data[: n - 1]:
        roller.roll_byte(b)
    return [roller.roll_byte(b) for b in data[n - 1 :]]


# Hash values for the individual bytes.
_BYTE_HASH = (
    0x2E4FC3F904065142, 0xC790984CFBC99527, 0x879F95EB8C62F187, 0x3B61BE86B5021EF2,
    0x65A896A04196F0A5, 0xC5B307B80470B59E, 0xD3BFF376A70DF14B, 0xC332F04F0B3F1701,
    0x753B5F0E9ABF3E0D, 0xB41538FDFE66EF53, 0x1906A10C2C1C0208, 0xFB0C712A03421C0D,
    0x38BE311A65C9552B, 0xFEE7EE4CA6445C7E, 0x71AADEDED184F21E, 0xD73426FCCDA23B2D,
    0x29773FB5FB9600B5, 0xCE410261CD32981A, 0xFE2848B3C62DBC2D, 0x459EAAFF6E43E11C,
    0xC13E35FC9C73A887, 0xF30ED5C201E76DBC, 0xA5F10B3910482CEA, 0x2945D59BE02DFAAD,
    0x06EE334FF70571B5, 0xBABF9D8070F44380, 0xEE3E2E9912FFD27C, 0x2A7118D1EA6B8EA7,
    0x26183CB9F7B1664C, 0xEA71DAC7DA068F21, 0xEA92ECA5BD1D0BB7, 0x415595862DEFCD75,
    0x248A386023C60648, 0x9CF021AB284B3C8A, 0xFC9372DF02870F6C, 0x2B92D693EEB3B3FC,
    0x73E799D139DC6975, 0x7B15AE312486363C, 0xB70E5454A2239C80, 0x208E3FB31D3B2263,
    0x01F563CABB930F44, 0x2AC4533D2A3240D8, 0x84231ED1064F6F7C, 0xA9F020977C2A6D19,
    0x213C227271C20122, 0x09FE8A9A0A03D07A, 0x4236DC75BCAF910C, 0x460A8B2BEAD8F17E,
    0xD9B27BE1AA07055F, 0xD202D5DC4B11C33E, 0x70ADB010543BEA12, 0xCDAE938F7EA6F579,
    0x3F3D870208672F4D, 0x8E6CCBCE9D349536, 0xE4C0871A389095AE, 0xF5F2A49152BCA080,
    0x9A43F9B97269934E, 0xC17B3753CB6F475C, 0xD56D941E8E206BD4, 0xAC0A4F3E525EDA00,
    0xA06D5A011912A550, 0x5537ED19537AD1DF, 0xA32FE713D611449D, 0x2A1D05B47C3B579F,
    0x991D02DBD30A2A52, 0x39E91E7E28F93EB0, 0x40D06ADB3E92C9AC, 0x9B9D3AFDE1C77C97,
    0x9A3F3F41C02C616F, 0x22ECD4BA00F60C44, 0x0B63D5D801708420, 0x8F227CA8F37FFAEC,
    0x0256278670887C24, 0x107E14877DBF540B, 0x32C19F2786AC1C05, 0x1DF5B12BB4BC9C61,
    0xC0CAC129D0D4C4E2, 0x9FDB52EE9800B001, 0x31F601D5D31C48C4, 0x72FF3C0928BCAEC7,
    0xD99264421147EB03, 0x535A2D6D38AEFCFE, 0x6BA8B4454A916237, 0xFA39366EAAE4719C,
    0x10F00FD7BBB24B6F, 0x5BD23185C76C84D4, 0xB22C3D7E1B00D33F, 0x3EFC20AA6BC830A8,
    0xD61C2503FE639144, 0x30CE625441EB92D3, 0xE5D34CF359E93100, 0xA8E5AA13F2B9F7A5,
    0x5C2B8D851CA254A6, 0x68FB6C5E8B0D5FDF, 0xC7EA4872C96B83AE, 0x6DD5D376F4392382,
    0x1BE88681AAA9792F, 0xFEF465EE1B6C10D9, 0x1F98B65ED43FCB2E, 0x4D1CA11EB6E9A9C9,
    0x7808E902B3857D0B, 0x171C9C4EA4607972, 0x58D66274850146DF, 0x42B311C10D3981D1,
    0x647FA8C621C41A4C, 0xF472771C66DDFEDC, 0x338D27E3F847B46B, 0x6402CE3DA97545CE,
    0x5162DB616FC38638, 0x9C83BE97BC22A50E, 0x2D3D7478A78D5E72, 0xE621A9B938FD5397,
    0x9454614EB0F81C45, 0x395FB6E742ED39B6, 0x77DD9179D06037BF, 0xC478D0FEE4D2656D,
    0x35D9D6CB772007AF, 0x83A56E92C883F0F6, 0x27937453250C00A1, 0x27BD6EBC3A46A97D,
    0x9F543BF784342D51, 0xD158F38C48B0ED52, 0x8DD8537C045F66B4, 0x846A57230226F6D5,
    0x6B13939E0C4E7CDF, 0xFCA25425D8176758, 0x92E5FC6CD52788E6, 0x9992E13D7A739170,
    0x518246F7A199E8EA, 0xF104C2A71B9979C7, 0x86B3FFAABEA4768F, 0x6388061CF3E351AD,
    0x09D9B5295DE5BBB5, 0x38BF1638C2599E92, 0x1D759846499E148D, 0x4C0FF015E5F96EF4,
    0xA41A94CFA270F565, 0x42D76F9CB2326C0B, 0x0CF385DD3C9C23BA, 0x0508A6C7508D6E7A,
    0x337523AABBE6CF8D, 0x646BB14001D42B12, 0xC178729D138ADC74, 0xF900EF4491F24086,
    0xEE1A90D334BB5AC4, 0x9755C92247301A50, 0xB999BF7C4FF1B610, 0x6AEEB2F3B21E8FC9,
    0x0FA8084CF91AC6FF, 0x10D226CF136E6189, 0xD302057A07D4FB21, 0x5F03800E20A0FCC3,
    0x80118D4AE46BD210, 0x58AB61A522843733, 0x51EDD575C5432A4B, 0x94EE6FF67F9197F7,
    0x765669E0E5E8157B, 0xA5347830737132F0, 0x3BA485A69F01510C, 0x0B247D7B957A01C3,
    0x1B3D63449FD807DC, 0x0FDC4721C30AD743, 0x8B535ED3829B2B14, 0xEE41D0CAD65D232C,
    0xE6A99ED97A6A982F, 0x65AC6194C202003D, 0x692ACCF3A70573EB, 0xCC3C02C3E200D5AF,
    0x0D419E8B325914A3, 0x320F160F42C25E40, 0x00710D647A51FE7A, 0x3C947692330AED60,
    0x9288AA280D355A7A, 0xA1806A9B791D1696, 0x5D60E38496763DA1, 0x6C69E22E613FD0F4,
    0x977FC2A5AADFFB17, 0xFB7BD063FC5A94BA, 0x460C17992CBAECE1, 0xF7822C5444D3297F,
    0x344A9790C69B74AA, 0xB80A42E6CAE09DCE, 0x1B1361EAF2B1E757, 0xD84C1E758E236F01,
    0x88E0B7BE347627CC, 0x45246009B7A99490, 0x8011C6DD3FE50472, 0xC341D682BFFB99D7,
    0x2511BE93808E2D15, 0xD5BC13D7FD739840, 0x2A3CD030679AE1EC, 0x8AD9898A4B9EE157,
    0x3245FEF0A8EAF521, 0x3D6D8DBBB427D2B0, 0x1ED146D8968B3981, 0x0C6A28BF7D45F3FC,
    0x4A1FD3DBCEE3C561, 0x4210FF6A476BF67E, 0xA559CCE0D9199AAC, 0xDE39D47EF3723380,
    0xE5B69D848CE42E35, 0xEFA24296F8E79F52, 0x70190B59DB9A5AFC, 0x26F166CDB211E7BF,
    0x4DEAF2DF3C6B8EF5, 0xF171DBDD670F1017, 0xB9059B05E9420D90, 0x2F0DA855C9388754,
    0x611D5E9AB77949CC, 0x2912038AC01163F4, 0x0231DF50402B2FBA, 0x45660FC4F3245F58,
    0xB91CC97C7C8DAC50, 0xB72D2AAFE4953427, 0xFA6463F87E813D6B, 0x4515F7EE95D5C6A2,
    0x1310E1C1A48D21C3, 0xAD48A7810CDD8544, 0x4D5BDFEFD5C9E631, 0xA43ED43F1FDCB7DE,
    0xE70CFC8FE1EE9626, 0xEF4711B0D8DDA442, 0xB80DD9BD4DAB6C93, 0xA23BE08D31BA4D93,
    0x9B37DB9D0335A39C, 0x494B6F870F5CFEBC, 0x6D1B3C1149DDA943, 0x372C943A518C1093,
    0xAD27AF45E77C09C4, 0x3B6F92B646044604, 0xAC2917909F5FCF4F, 0x2069A60E977E5557,
    0x353A469E71014DE5, 0x24BE356281F55C15, 0x2B6D710BA8E9ADEA, 0x404AD1751C749C29,
    0xED7311BF23D7F185, 0xBA4F6976B4ACC43E, 0x32D7198D2BC39000, 0xEE667019014D6E01,
    0x494EF3E128D14C83, 0x1F95A152BAECD6BE, 0x201648DFF1F483A5, 0x68C28550C8384AF6,
    0x5FC834A6824A7F48, 0x7CD06CB7365EAF28, 0xD82BBD95E9B30909, 0x234F0D1694C53F6D,
    0xD2FB7F4A96D83F4A, 0xFF0D5DA83ACAC05E, 0xF8F6B97F5585080A, 0x74236084BE57B95B,
    0xA25E40C03BBC36AD, 0x6B6E5C14CE88465B, 0x4378FFE93E1528C5, 0x94CA92A17118E2D2,
)