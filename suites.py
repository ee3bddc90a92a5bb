from typing import Dict

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Wheel wirings shared by both machines, in cycle notation
_WHEELS = """\
I     MQ      (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
II    ME      (FIXVYOMW) (CDKLHUP) (ESZ) (BJ) (GR) (NT) (A) (Q)
III   MV      (ABDHPEJT) (CFLVMZOYQIRWUKXSG) (N)
IV    MJ      (AEPLIYWCOXMRFZBSTGJQNH) (DV) (KU)
V     MZ      (AVOLDRWFIUQ) (BZKSMNHYC) (EGTJPX)
VI    MZM     (AJQDVLEOZWIYTS) (CGMNHFUX) (BPRK)
VII   MZM     (ANOUPFRIMBZTLWKSVEGCJYDHXQ)
VIII  MZM     (AFLSETWUNDHOZVICQ) (BKJ) (GXY) (MPR)
"""

# Kriegsmarine M4: thin reflector, a fixed Greek wheel, three moving rotors
NAVAL = f"""\
{Alpha26}
5 3
{_WHEELS}\
Beta  N       (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
Gamma N       (AFNIRLBSQWVXGUZDKMTPCOYJHE)
B     R       (AE) (BN) (CK) (DQ) (FU) (GY) (HW) (IJ) (LO) (MP)
              (RX) (SZ) (TV)
C     R       (AR) (BD) (CO) (EJ) (FN) (GT) (HK) (IV) (LM) (PW)
              (QZ) (SX) (UY)
"""

# Wehrmacht M3: wide reflector, three moving rotors
ARMY = f"""\
{Alpha26}
4 3
{_WHEELS}\
B     R       (AY) (BR) (CU) (DH) (EQ) (FS) (GL) (IP) (JX) (KN) (MO)
              (TZ) (VW)
C     R       (AF) (BV) (CP) (DJ) (EI) (GO) (HY) (KR) (LZ) (MX) (NW)
              (QT) (SU)
"""

SUITES: Dict[str, str] = {
    "naval": NAVAL,
    "army": ARMY,
}
